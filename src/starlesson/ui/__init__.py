"""
StarLesson UI

Widgets, output placeholders and layout helpers, all plain FastHTML
components with Datastar attributes.
"""

from .widgets import (
    InputSpec,
    SESSION_SIGNAL,
    UPDATE_PATH,
    collect_inputs,
    collect_defaults,
    update_action,
    input_numeric,
    input_slider,
    input_text,
    input_text_area,
    input_radio_buttons,
    input_checkbox,
    input_select,
    input_date,
    input_action_button,
    input_file,
)
from .outputs import (
    output_text,
    output_text_verbatim,
    output_table,
    output_plot,
    output_ui,
)
from .layout import page, card, sidebar_layout, panel_conditional, signal, session_signals
from .charts import BarChart, bar_chart, histogram

__all__ = [
    "InputSpec",
    "SESSION_SIGNAL",
    "UPDATE_PATH",
    "collect_inputs",
    "collect_defaults",
    "update_action",
    "input_numeric",
    "input_slider",
    "input_text",
    "input_text_area",
    "input_radio_buttons",
    "input_checkbox",
    "input_select",
    "input_date",
    "input_action_button",
    "input_file",
    "output_text",
    "output_text_verbatim",
    "output_table",
    "output_plot",
    "output_ui",
    "page",
    "card",
    "sidebar_layout",
    "panel_conditional",
    "signal",
    "session_signals",
    "BarChart",
    "histogram",
    "bar_chart",
]
