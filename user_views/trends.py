from shiny import ui, render, reactive
from shinywidgets import output_widget, render_plotly
import plotly.graph_objects as go

from dashboard.draw_charts import render_empty
from dashboard.errors import LoadFailure
from dashboard.filters import FilterController
from dashboard.log import get_logger
from dashboard.series import series_frame
from fetch_years_data import YEARS_DATA_URL, load_store

log = get_logger(__name__)

ALL_YEARS = {"": "All years"}
LOAD_ERROR_MESSAGE = "Could not load the uninsured dataset"


def panel():
    return ui.page_fluid(
        ui.output_text("selected_items"),
        output_widget("plot_trends"),
        ui.output_data_frame("tbl_trends"),
    )


def load_trends(source=YEARS_DATA_URL):
    """
    Load the dataset and draw the first chart.
    Returns (controller, fig); controller is None and fig shows the error
    state when the dataset could not be loaded.
    """
    fig = go.Figure()
    try:
        store = load_store(source)
    except LoadFailure as exc:
        log.error("trends_unavailable", source=source, error=str(exc))
        render_empty(fig, LOAD_ERROR_MESSAGE)
        return None, fig
    controller = FilterController(store, fig)
    controller.build()
    return controller, fig


def control_choices(store):
    """(county choices, year choices) for the sidebar controls."""
    years = {**ALL_YEARS, **{y: y for y in store.year_tokens()}}
    return store.counties(), years


def server_bind(output, input, source=YEARS_DATA_URL):
    controller, fig = load_trends(source)
    version = reactive.value(0)

    if controller is None:
        ui.notification_show(f"{LOAD_ERROR_MESSAGE} ({source})", type="error", duration=None)
    else:
        # Populate the controls once the rows are in
        counties, years = control_choices(controller.store)
        ui.update_selectize("county", choices=counties, selected=[])
        ui.update_select("year", choices=years, selected="")

    def _bump():
        version.set(version.get() + 1)

    @reactive.effect
    @reactive.event(input.county, ignore_init=True)
    def _county_changed():
        if controller is None:
            return
        controller.on_county_change(input.county() or ())
        _bump()

    @reactive.effect
    @reactive.event(input.year, ignore_init=True)
    def _year_changed():
        if controller is None:
            return
        if not controller.on_year_change(input.year()):
            ui.notification_show("Invalid year selected", type="warning", duration=3)
            return
        _bump()

    @reactive.effect
    @reactive.event(input.clear)
    def _clear():
        if controller is None:
            return
        controller.clear()
        ui.update_selectize("county", selected=[])
        ui.update_select("year", selected="")
        _bump()

    @render_plotly
    def plot_trends():
        version()
        return fig

    @render.text
    def selected_items():
        version()
        if controller is None:
            return ""
        return controller.selection_summary()

    @render.data_frame
    def tbl_trends():
        version()
        if controller is None:
            return series_frame([])
        return series_frame(controller.series)
