"""
StarLesson - reactive web pages in small lessons

A UI tree of widgets and output placeholders, a server function that fills
the placeholders with `@render` functions, and a reactive graph that
re-renders only what changed. Built on FastHTML and Datastar.

    from starlesson import App, render, ui

    app_ui = ui.page("Hello", ui.input_text("name", "Name", "World"), ui.output_text("greeting"))

    def server(input, output, session):
        @render.text
        def greeting():
            return f"Hello {input.name()}!"

    App(app_ui, server).run()
"""

from .core import (
    MISSING,
    Value,
    Calc,
    Effect,
    ReactiveGraph,
    calc,
    effect,
    isolate,
    flush,
    current_graph,
    event,
    req,
    need,
    validate,
)
from .errors import (
    StarLessonError,
    SilentException,
    ValidationError,
    ReactiveCycleError,
    UnknownInputError,
    SessionNotFound,
)
from .config import ApplicationConfig, Environment, get_config, set_config
from .logging_config import configure_logging
from .session import FileInfo, Inputs, Outputs, Session, current_session
from . import ui
from . import render
from .app import App, datastar_script, default_headers

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "Value",
    "Calc",
    "Effect",
    "ReactiveGraph",
    "calc",
    "effect",
    "isolate",
    "flush",
    "current_graph",
    "event",
    "req",
    "need",
    "validate",
    "StarLessonError",
    "SilentException",
    "ValidationError",
    "ReactiveCycleError",
    "UnknownInputError",
    "SessionNotFound",
    "ApplicationConfig",
    "Environment",
    "get_config",
    "set_config",
    "configure_logging",
    "FileInfo",
    "Inputs",
    "Outputs",
    "Session",
    "current_session",
    "ui",
    "render",
    "App",
    "datastar_script",
    "default_headers",
]
