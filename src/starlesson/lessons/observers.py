"""Side-effect observers: react to a change without rendering anything."""

import logging
from datetime import datetime

from starlesson import Value, effect, isolate, render, ui

logger = logging.getLogger(__name__)

TITLE = "Observers"
SUMMARY = [
    "An observer (`@effect`) runs for its side effects: writing to the log, "
    "updating a value, calling a service. It reruns whenever an input it read "
    "changes, and unlike a reactive expression it does not wait to be asked.",
    "The observer below logs every change of the text box and appends it to a "
    "history value. It reads the old history inside `isolate()`, so writing "
    "the history does not trigger it again.",
]

MAX_HISTORY = 8

app_ui = ui.sidebar_layout(
    [
        ui.input_text("message", "Type something", "hello"),
        ui.input_action_button("clear", "Clear history"),
    ],
    [ui.card(ui.output_text_verbatim("history"), header="Change history")],
)


def server(input, output, session):
    changes = Value([], name="history")

    @effect
    def log_message():
        text = input.message()
        logger.info("Session %s: message is now %r", session.id, text)
        stamp = datetime.now().strftime("%H:%M:%S")
        with isolate():
            changes.set([*changes(), f"{stamp}  {text}"][-MAX_HISTORY:])

    @effect
    def clear_history():
        if input.clear():
            changes.set([])

    @render.code
    def history():
        return "\n".join(changes()) or "(empty)"
