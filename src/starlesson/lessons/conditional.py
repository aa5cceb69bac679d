"""Panels shown or hidden in the browser from an input value."""

from starlesson import render, ui

TITLE = "Conditional panels"
SUMMARY = [
    "`panel_conditional` takes a Datastar expression over the page's inputs "
    "(`$advanced`, `$plot_type == 'hist'`) and shows its content only while "
    "the expression is true. It is evaluated in the browser, so nothing is "
    "sent to the server when it toggles.",
    "Hidden inputs keep their values and still reach the server.",
]

app_ui = ui.sidebar_layout(
    [
        ui.input_select("plot_type", "Plot type", {"hist": "Histogram", "table": "Table"}),
        ui.panel_conditional(
            f"{ui.signal('plot_type')} == 'hist'",
            ui.input_slider("breaks", "Bins", min=5, max=50, value=20),
        ),
        ui.input_checkbox("advanced", "Show advanced options"),
        ui.panel_conditional(
            ui.signal("advanced"),
            ui.input_numeric("scale", "Scale factor", 1.0, step=0.5),
            ui.input_text("unit", "Unit", "km"),
        ),
    ],
    [
        ui.panel_conditional(f"{ui.signal('plot_type')} == 'hist'", ui.card(ui.output_plot("hist"), header="Histogram")),
        ui.panel_conditional(f"{ui.signal('plot_type')} == 'table'", ui.card(ui.output_table("values"), header="Values")),
        ui.output_text("description"),
    ],
)

DISTANCES = [12.5, 3.2, 7.8, 15.1, 9.9, 4.4, 11.0, 6.3, 8.8, 14.2, 5.5, 10.7]


def server(input, output, session):
    def scaled():
        return [d * (input.scale() or 1.0) for d in DISTANCES]

    @render.plot
    def hist():
        return ui.histogram(scaled(), bins=input.breaks(), title=f"Distances ({input.unit()})")

    @render.table
    def values():
        return [{"trip": i + 1, input.unit(): round(d, 2)} for i, d in enumerate(scaled())]

    @render.text
    def description():
        return f"Showing a {input.plot_type()} of {len(DISTANCES)} trips, scaled by {input.scale()}."
