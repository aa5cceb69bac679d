"""
Layout helpers for lesson pages.
"""

import json

from fasthtml.common import *
from monsterui.all import Card, TextPresets

from .widgets import SESSION_SIGNAL


def signal(input_id: str) -> str:
    """Reference an input inside a Datastar expression: signal("n") -> "$n"."""
    return f"${input_id}"


def panel_conditional(condition: str, *children, **kwargs):
    """
    Show `children` only while the Datastar expression `condition` is true.

    Evaluated in the browser, so toggling visibility needs no round trip:
    panel_conditional(f"{signal('show')}", ...) or "$n > 50".
    """
    return Div(*children, data_show=condition, cls="starlesson-conditional", **kwargs)


def card(*children, header=None, **kwargs):
    return Card(*children, header=H4(header) if isinstance(header, str) else header, **kwargs)


def sidebar_layout(sidebar, main, *, sidebar_title=None):
    """Inputs on the left, outputs on the right."""
    sidebar = sidebar if isinstance(sidebar, (list, tuple)) else [sidebar]
    main = main if isinstance(main, (list, tuple)) else [main]
    return Div(
        Aside(card(*sidebar, header=sidebar_title), cls="md:col-span-1"),
        Div(*main, cls="md:col-span-2 space-y-4"),
        cls="grid grid-cols-1 md:grid-cols-3 gap-6",
    )


def page(title: str, *children, subtitle=None):
    """The body of a lesson: heading, optional subtitle, content."""
    return Div(
        H2(title, cls="text-2xl font-bold mb-2"),
        P(subtitle, cls=TextPresets.muted_sm + " mb-6") if subtitle else "",
        *children,
        cls="starlesson-page space-y-4",
    )


def session_signals(session_id: str, extra=None):
    """Hidden element that seeds the page's Datastar store with the session id."""
    signals = {**(extra or {})}
    signals[SESSION_SIGNAL] = session_id
    return Div({"data-signals": json.dumps(signals)}, id="starlesson-session", hidden=True)
