# dashboard/draw_charts.py — Plotly renderer for the uninsured trends chart
# What it does:
# - render(): wipe the figure, then redraw axes, one line per county, all point
#   markers, axis labels and the title from a ScalePair
# - render_empty(): same frame with a message and no traces (no data / load error)
# - line_paths() / marker_count(): what is currently drawn on a figure

import plotly.graph_objects as go

from dashboard.scales import CHART_HEIGHT, CHART_WIDTH

MARGIN = {"t": 20, "r": 30, "b": 40, "l": 40}
FRAME_WIDTH = CHART_WIDTH + MARGIN["l"] + MARGIN["r"]     # 800
FRAME_HEIGHT = CHART_HEIGHT + MARGIN["t"] + MARGIN["b"]   # 450

TITLE = "Percent of population Uninsured from 2009-2020 in VA Counties"
X_LABEL = "Year"
Y_LABEL = "Percentage of population uninsured (%)"


def _reset(fig: go.Figure, body=(CHART_WIDTH, CHART_HEIGHT)):
    """Drop every trace, shape and annotation; frame = chart body plus margins."""
    fig.data = []
    fig.layout = go.Layout()
    fig.update_layout(
        width=body[0] + MARGIN["l"] + MARGIN["r"],
        height=body[1] + MARGIN["t"] + MARGIN["b"],
        margin=MARGIN,
        autosize=False,
        showlegend=False,
        plot_bgcolor="white",
        title={"text": TITLE, "x": 0.5, "xanchor": "center", "font": {"size": 16}},
    )


def render(fig: go.Figure, series, scales) -> None:
    """
    Full redraw of `fig` for the given series and scales (no diffing).
    Lines are straight segments between points in series order; the chart
    body is sized by the pixel ranges of the scales, Plotly maps the domains.
    """
    x_lo, x_hi = scales.temporal.range
    y_lo, y_hi = scales.value.range
    _reset(fig, body=(abs(x_hi - x_lo), abs(y_hi - y_lo)))

    x0, x1 = scales.temporal.domain
    fig.update_xaxes(
        type="date",
        range=[x0, x1],
        tickvals=scales.temporal.ticks(),
        tickformat="%Y",
        showline=True,
        linecolor="black",
        ticks="outside",
        title={"text": X_LABEL, "font": {"size": 12}},
    )
    fig.update_yaxes(
        range=list(scales.value.domain),
        tickvals=scales.value.ticks(),
        showline=True,
        linecolor="black",
        ticks="outside",
        title={"text": Y_LABEL, "font": {"size": 12}},
    )

    for s in series:
        fig.add_trace(go.Scatter(
            x=[p.year for p in s.values],
            y=[p.value for p in s.values],
            mode="lines",
            name=s.name,
            line={"color": "black", "width": 1.2, "shape": "linear"},
            hoverinfo="skip",
        ))

    points = [(s.name, p) for s in series for p in s.values]
    if points:
        fig.add_trace(go.Scatter(
            x=[p.year for _, p in points],
            y=[p.value for _, p in points],
            customdata=[name for name, _ in points],
            mode="markers",
            name="points",
            marker={"color": "black", "size": 6},
            hovertemplate="%{customdata}<br>%{x|%Y}: %{y}<extra></extra>",
        ))


def render_empty(fig: go.Figure, message: str) -> None:
    """Explicit empty/error state: cleared frame plus a centered message."""
    _reset(fig)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.add_annotation(
        text=message,
        x=0.5, y=0.5, xref="paper", yref="paper",
        showarrow=False,
        font={"size": 14},
    )


def line_paths(fig: go.Figure) -> list:
    return [t for t in fig.data if t.mode == "lines"]


def marker_count(fig: go.Figure) -> int:
    return sum(len(t.x) for t in fig.data if t.mode == "markers")
