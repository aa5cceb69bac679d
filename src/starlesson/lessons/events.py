"""Handlers triggered by a button instead of by every input change."""

from starlesson import Value, calc, effect, event, render, ui
from starlesson.lessons.data import sample

TITLE = "Event-triggered handlers"
SUMMARY = [
    "Sometimes an output should wait for the user to finish: `@event(input.go)` "
    "makes a reactive expression or observer depend on the button only. "
    "Everything else it reads is isolated.",
    "Until the button is first clicked its value is 0 and the gated code "
    "does not run at all, so the summary stays empty.",
]

app_ui = ui.sidebar_layout(
    [
        ui.input_slider("n", "Sample size", min=10, max=1000, value=100, step=10),
        ui.input_action_button("go", "Draw sample"),
        ui.input_action_button("reset", "Reset count"),
    ],
    [
        ui.card(ui.output_plot("hist"), header="Histogram (updates on click)"),
        ui.card(ui.output_text("summary"), header="Summary"),
    ],
)


def server(input, output, session):
    runs = Value(0, name="runs")

    @calc
    @event(input.go)
    def drawn():
        return sample("norm", input.n(), seed=input.go())

    @effect
    @event(input.go)
    def count_runs():
        runs.set(runs() + 1)

    @effect
    @event(input.reset, ignore_init=True)
    def reset_runs():
        runs.set(0)

    @render.plot
    def hist():
        return ui.histogram(drawn(), bins=20, title=f"Draw #{input.go()}")

    @render.text
    def summary():
        return f"{len(drawn())} values drawn, {runs()} draw(s) since the last reset"
