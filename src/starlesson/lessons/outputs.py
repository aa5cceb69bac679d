"""Plot and table outputs driven by a slider and a select."""

from starlesson import render, ui
from starlesson.lessons.data import MTCARS, sample

TITLE = "Plots and tables"
SUMMARY = [
    "Outputs are placeholders in the UI (`output_plot`, `output_table`) filled "
    "by server functions decorated with the matching renderer. The function "
    "name is the placeholder id.",
    "Move the slider: only the histogram is recomputed. Change the cylinder "
    "filter: only the table is.",
]

app_ui = ui.sidebar_layout(
    [
        ui.input_slider("n", "Sample size", min=10, max=1000, value=200, step=10),
        ui.input_select("cyl", "Cylinders", {"all": "All", "4": "4", "6": "6", "8": "8"}),
    ],
    [
        ui.card(ui.output_plot("hist"), header="Histogram"),
        ui.card(ui.output_table("cars"), header="Cars"),
    ],
)


def server(input, output, session):
    @render.plot
    def hist():
        values = sample("norm", input.n())
        return ui.histogram(values, bins=20, title=f"{len(values)} normal draws")

    @render.table
    def cars():
        if input.cyl() == "all":
            return MTCARS
        return [row for row in MTCARS if str(row["cyl"]) == input.cyl()]
