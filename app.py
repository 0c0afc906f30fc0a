# app.py — wires the filter controls and the Trends tab together

from shiny import App, ui, reactive
from user_views import trends

app_ui = ui.page_fluid(
    ui.panel_title("Virginia Counties — Population Uninsured (2009–2020)"),
    ui.layout_sidebar(
        ui.sidebar(
            # Options are filled in by trends.server_bind once the dataset is loaded
            ui.input_selectize("county", "County", choices=[], multiple=True),

            # Single year; narrows the x-axis to that year
            ui.input_select("year", "Year", choices=trends.ALL_YEARS),

            ui.input_action_button("clear", "Clear filters"),
            width=320,
        ),

        ui.navset_tab(
            ui.nav_panel("Trends", *trends.panel().children),
        ),
    ),
)

def server(input, output, session):
    # Small toast whenever filters are cleared (non-blocking)
    @reactive.effect
    @reactive.event(input.clear)
    def _notify_clear():
        ui.notification_show("Filters cleared", type="message", duration=2)

    trends.server_bind(output, input)

app = App(app_ui, server)
