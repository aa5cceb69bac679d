"""
Output Renderers

Decorators that bind a function to the output placeholder of the same name:

    @render.text
    def greeting():
        return f"Hello {input.name()}!"

Each renderer owns an Effect. When anything the function read changes, the
placeholder fragment is rendered again and queued on the session's outputs.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from fasthtml.common import *

from .core.reactive import Effect
from .errors import ReactiveCycleError, SilentException, ValidationError
from .session import Session, current_session
from .ui import outputs as placeholders
from .ui.charts import BarChart, bar_chart
from .ui.widgets import collect_inputs

logger = logging.getLogger(__name__)

__all__ = ["Renderer", "text", "code", "table", "plot", "ui"]


class Renderer:
    """Base renderer: subclasses pick a placeholder and turn a value into children."""

    placeholder = staticmethod(placeholders.output_text)
    priority = 0

    def __init__(self, fn: Callable[[], Any], *, id: Optional[str] = None, session: Optional[Session] = None):
        self.fn = fn
        self.id = id or fn.__name__
        self.session = session or current_session()
        if self.session is None:
            raise RuntimeError(f"Output {self.id!r} must be defined inside a server function")
        self.render_count = 0
        self.session.output.register(self.id, self)
        self._effect = Effect(self._run, priority=self.priority, name=f"output:{self.id}", graph=self.session.graph)

    def __call__(self):
        return self.fn()

    def render(self, value: Any) -> tuple:
        raise NotImplementedError

    def _run(self) -> None:
        try:
            value = self.fn()
            children = () if value is None else self.render(value)
        except SilentException:
            children = ()
        except ValidationError as e:
            children = (P(e.message, cls="starlesson-validation text-muted-foreground italic"),)
        except ReactiveCycleError:
            raise
        except Exception as e:
            logger.exception("Output %r failed to render", self.id)
            children = (P(f"Error: {e}", cls="starlesson-error text-red-600"),)
        self.render_count += 1
        self.session.output.push(self.id, to_xml(self.placeholder(self.id, *children)))

    def destroy(self) -> None:
        self._effect.destroy()


class TextRenderer(Renderer):
    def render(self, value):
        return (str(value),)


class CodeRenderer(Renderer):
    placeholder = staticmethod(placeholders.output_text_verbatim)

    def render(self, value):
        return (str(value),)


class TableRenderer(Renderer):
    """Renders a list of dicts, or a mapping of column name to column values."""

    placeholder = staticmethod(placeholders.output_table)

    def render(self, value):
        columns, rows = _table_data(value)
        if not columns:
            return (P("No rows", cls="text-muted-foreground"),)
        return (Table(
            Thead(Tr(*[Th(c) for c in columns])),
            Tbody(*[Tr(*[Td(_cell(row.get(c))) for c in columns]) for row in rows]),
            cls="uk-table uk-table-divider uk-table-hover uk-table-sm",
        ),)


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.4g}"
    return str(value)


def _table_data(value):
    if isinstance(value, Mapping):
        columns = list(value.keys())
        length = max((len(v) for v in value.values()), default=0)
        rows = [{c: (value[c][i] if i < len(value[c]) else None) for c in columns} for i in range(length)]
        return columns, rows
    if isinstance(value, Sequence) and not isinstance(value, str):
        rows = list(value)
        columns = []
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)
        return columns, rows
    raise TypeError(f"Cannot render {type(value).__name__} as a table")


class PlotRenderer(Renderer):
    """Renders a BarChart, a dict of BarChart fields, or ready-made markup."""

    placeholder = staticmethod(placeholders.output_plot)

    def render(self, value):
        if isinstance(value, dict):
            value = BarChart(**value)
        if isinstance(value, BarChart):
            return (bar_chart(value),)
        return (value,)


class UIRenderer(Renderer):
    """Renders markup; widgets inside it become inputs of the session."""

    placeholder = staticmethod(placeholders.output_ui)
    # Declares new inputs, so it renders before outputs that read them
    priority = 1

    def render(self, value):
        children = (value,) if isinstance(value, FT) or not isinstance(value, (list, tuple)) else tuple(value)
        # The browser takes the rendered defaults, so the server does too
        self.session.declare_inputs(collect_inputs(children), reset=True)
        return children


def _decorator(cls):
    def decorate(fn=None, *, id: Optional[str] = None):
        if fn is not None:
            return cls(fn, id=id)
        return lambda f: cls(f, id=id)
    decorate.__name__ = cls.__name__
    decorate.__doc__ = cls.__doc__
    return decorate


text = _decorator(TextRenderer)
code = _decorator(CodeRenderer)
table = _decorator(TableRenderer)
plot = _decorator(PlotRenderer)
ui = _decorator(UIRenderer)
