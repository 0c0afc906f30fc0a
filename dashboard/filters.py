# dashboard/filters.py — county/year filter state and the redraw pipeline
# What it does:
# - FilterSelection: the current county subset + optional year token
# - FilterController: turns widget events into
#     filter rows -> to_series() -> build_scales() -> render()
#   County changes narrow the rows; a year change keeps every row and
#   swaps in a one-year temporal domain instead.

from __future__ import annotations
from dataclasses import dataclass, field, replace

from dashboard.draw_charts import render, render_empty
from dashboard.errors import InvalidYearSelection
from dashboard.log import get_logger
from dashboard.scales import build_scales, year_override
from dashboard.series import filter_records, shared_years, to_series

log = get_logger(__name__)

NO_MATCH_MESSAGE = "No counties match the selected filters"
NO_YEARS_MESSAGE = "No year columns to plot"


@dataclass(frozen=True)
class FilterSelection:
    counties: frozenset = field(default_factory=frozenset)
    year: str | None = None


class FilterController:
    """
    Owns the FilterSelection for one session and redraws `fig` on every change.
    Handlers run to completion; each redraw replaces the whole chart.
    """

    def __init__(self, store, fig):
        self.store = store
        self.fig = fig
        self.selection = FilterSelection()
        self.override = None
        self.series = []
        self.scales = None

    # ---------- events ----------
    def build(self):
        """Initial chart from the full dataset."""
        return self._redraw(self.store.records, None)

    def on_county_change(self, counties):
        self.selection = replace(self.selection, counties=frozenset(counties or ()))
        self.override = None
        log.info("county_filter_changed", counties=sorted(self.selection.counties))
        return self._redraw(filter_records(self.store.records, self.selection), None)

    def on_year_change(self, token) -> bool:
        """
        Apply a year selection. Returns False (and changes nothing) when the
        token does not parse; an empty token drops the year filter.
        """
        if not token:
            self.selection = replace(self.selection, year=None)
            self.override = None
            self._redraw(filter_records(self.store.records, self.selection), None)
            return True
        try:
            override = year_override(token)
        except InvalidYearSelection as exc:
            log.warning("invalid_year_selected", year=token, error=str(exc))
            return False

        year = token.strip()
        self.selection = replace(self.selection, year=year)
        self.override = override
        log.info("year_filter_changed", year=year)
        # The year drives the axis domain only; every row stays in view
        self._redraw(self.store.records, override)
        return True

    def clear(self):
        self.selection = FilterSelection()
        self.override = None
        log.info("filters_cleared")
        return self._redraw(self.store.records, None)

    # ---------- pipeline ----------
    def _redraw(self, records, override):
        self.series = to_series(records)
        if not any(s.values for s in self.series):
            # No rows, or rows without a single usable year column
            self.scales = None
            render_empty(self.fig, NO_MATCH_MESSAGE if not self.series else NO_YEARS_MESSAGE)
            return self.series
        shared_years(self.series)
        self.scales = build_scales(self.series, override)
        render(self.fig, self.series, self.scales)
        return self.series

    def selection_summary(self) -> str:
        """Readout of the selected items, e.g. 'Counties: Arlington, Fairfax · Year: 2010'."""
        counties = ", ".join(sorted(self.selection.counties)) or "All"
        year = self.selection.year or "All"
        return f"Counties: {counties} · Year: {year}"
