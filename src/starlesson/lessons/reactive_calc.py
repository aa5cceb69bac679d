"""A reactive expression shared by two outputs."""

from statistics import mean, median, stdev

from starlesson import calc, render, ui
from starlesson.lessons.data import sample

TITLE = "Reactive expressions"
SUMMARY = [
    "A reactive expression (`@calc`) caches its result. Every output that "
    "calls it gets the cached value; it is recomputed only after one of the "
    "inputs it read has changed, and only when something asks for it again.",
    "Both outputs below use the same sample. The counter shows how many times "
    "the sample was actually drawn. Changing the title re-renders the plot "
    "but does not draw again.",
]

app_ui = ui.sidebar_layout(
    [
        ui.input_radio_buttons("dist", "Distribution", {"norm": "Normal", "unif": "Uniform", "exp": "Exponential"}),
        ui.input_slider("n", "Sample size", min=10, max=500, value=100, step=10),
        ui.input_numeric("seed", "Seed", 42),
        ui.input_text("title", "Plot title", "Sample"),
    ],
    [
        ui.card(ui.output_plot("plot"), header="Histogram"),
        ui.card(ui.output_text_verbatim("stats"), header="Statistics"),
        ui.output_text("draws"),
    ],
)


def server(input, output, session):
    @calc
    def data():
        return sample(input.dist(), input.n(), seed=input.seed() or 0)

    @render.plot
    def plot():
        return ui.histogram(data(), bins=15, title=input.title())

    @render.code
    def stats():
        values = data()
        return "\n".join([
            f"n       {len(values)}",
            f"mean    {mean(values):.3f}",
            f"median  {median(values):.3f}",
            f"sd      {stdev(values):.3f}",
        ])

    @render.text
    def draws():
        data()
        return f"Sample drawn {data.run_count} time(s)"
