"""Every kind of input widget, echoed back as text."""

from starlesson import render, ui

TITLE = "Input widgets"
SUMMARY = [
    "A widget is a control bound to a named input. Its first argument is the "
    "input id; in the server function the current value is read with "
    "`input.<id>()`.",
    "Numbers come back as numbers, checkboxes as booleans, multi-selects as "
    "lists and dates as ISO strings, whatever the browser sent.",
]

app_ui = ui.sidebar_layout(
    [
        ui.input_numeric("obs", "Number of observations", 10, min=1, max=100),
        ui.input_slider("bins", "Bins", min=1, max=50, value=30),
        ui.input_text("caption", "Caption", "Data summary"),
        ui.input_text_area("notes", "Notes", "", rows=2),
        ui.input_radio_buttons("dist", "Distribution", {"norm": "Normal", "unif": "Uniform", "exp": "Exponential"}),
        ui.input_checkbox("show_mean", "Show mean", True),
        ui.input_select("columns", "Columns", ["mpg", "cyl", "hp", "wt"], selected=["mpg", "hp"], multiple=True),
        ui.input_date("day", "Date", "2024-01-01"),
    ],
    [
        ui.card(ui.output_text_verbatim("values"), header="Current values"),
        ui.card(ui.output_text("sentence"), header="In a sentence"),
    ],
    sidebar_title="Inputs",
)


def server(input, output, session):
    @render.code
    def values():
        return "\n".join(f"{name:<10} {input[name]()!r}" for name in
                         ("obs", "bins", "caption", "dist", "show_mean", "columns", "day", "notes"))

    @render.text
    def sentence():
        mean = "with" if input.show_mean() else "without"
        return (f"{input.caption()}: {input.obs()} {input.dist()} observations in {input.bins()} bins, "
                f"{mean} the mean, columns {', '.join(input.columns()) or 'none'}, on {input.day()}.")
