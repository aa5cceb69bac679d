"""
Input Widgets

Each widget renders FastHTML markup bound to a Datastar signal named after
the input id. The wrapper element declares the default value in
`data-signals` and is tagged with `data-starlesson-input`, so the server can
discover every input by walking the UI tree (see `collect_inputs`).

Changes are posted back to the page's `_update` endpoint, relative to the
page URL.
"""

import json
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from fasthtml.common import *
from monsterui.all import ButtonT

from ..config import get_config

INPUT_ATTR = "data-starlesson-input"
KIND_ATTR = "data-starlesson-kind"
SESSION_SIGNAL = "starlesson_sid"
UPDATE_PATH = "_update"

Choices = Union[Iterable[str], Mapping[str, str]]

_LABEL_CLS = "block text-sm font-medium mb-1"
_FIELD_CLS = "uk-input"
_WIDGET_CLS = "starlesson-input mb-4"


@dataclass
class InputSpec:
    """An input discovered in a UI tree."""
    id: str
    default: Any
    kind: str = "value"


def update_action() -> str:
    return f"@post('{UPDATE_PATH}')"


def _debounced(event: str = "input") -> Dict[str, str]:
    ms = get_config().reactive.input_debounce_ms
    return {f"data-on-{event}__debounce.{ms}ms": update_action()}


def _on_change() -> Dict[str, str]:
    return {"data-on-change": update_action()}


def _check_id(input_id: str) -> str:
    if not input_id or not input_id.replace("_", "a").isalnum() or input_id[0].isdigit():
        raise ValueError(f"Input id must be a Python identifier, got {input_id!r}")
    if input_id.startswith("_"):
        raise ValueError(f"Input id {input_id!r} may not start with an underscore")
    if input_id == SESSION_SIGNAL:
        raise ValueError(f"Input id {input_id!r} is reserved")
    return input_id


def _widget(input_id: str, signals: Dict[str, Any], *children, kind: str = "value", cls: str = _WIDGET_CLS):
    return Div(
        {"data-signals": json.dumps(signals), INPUT_ATTR: input_id, KIND_ATTR: kind},
        *children,
        id=f"{input_id}-widget",
        cls=cls,
    )


def _label(input_id: str, label):
    return Label(label, fr=input_id, cls=_LABEL_CLS) if label else ""


def _choice_items(choices: Choices) -> List[tuple]:
    if isinstance(choices, Mapping):
        return [(str(k), str(v)) for k, v in choices.items()]
    return [(str(c), str(c)) for c in choices]


def input_numeric(input_id: str, label, value: Union[int, float], *,
                  min: Optional[float] = None, max: Optional[float] = None, step: Optional[float] = None):
    """A number box."""
    _check_id(input_id)
    return _widget(
        input_id, {input_id: value},
        _label(input_id, label),
        Input(_debounced(), type="number", id=input_id, value=value, min=min, max=max, step=step,
              data_bind=input_id, cls=_FIELD_CLS),
    )


def input_slider(input_id: str, label, min: Union[int, float], max: Union[int, float],
                 value: Union[int, float], *, step: Union[int, float] = 1):
    """A range slider with its current value shown next to it."""
    _check_id(input_id)
    if not min <= value <= max:
        raise ValueError(f"Slider {input_id!r} value {value} outside [{min}, {max}]")
    return _widget(
        input_id, {input_id: value},
        _label(input_id, label),
        Div(
            Input(_debounced(), type="range", id=input_id, min=min, max=max, step=step, value=value,
                  data_bind=input_id, cls="uk-range flex-1"),
            Span(data_text=f"${input_id}", cls="font-mono w-12 text-right"),
            cls="flex items-center gap-3",
        ),
    )


def input_text(input_id: str, label, value: str = "", *, placeholder: Optional[str] = None):
    _check_id(input_id)
    return _widget(
        input_id, {input_id: value},
        _label(input_id, label),
        Input(_debounced(), type="text", id=input_id, value=value, placeholder=placeholder,
              data_bind=input_id, cls=_FIELD_CLS),
    )


def input_text_area(input_id: str, label, value: str = "", *, rows: int = 4, placeholder: Optional[str] = None):
    _check_id(input_id)
    return _widget(
        input_id, {input_id: value},
        _label(input_id, label),
        Textarea(_debounced(), value, id=input_id, rows=rows, placeholder=placeholder,
                 data_bind=input_id, cls="uk-textarea"),
    )


def input_radio_buttons(input_id: str, label, choices: Choices, *, selected: Optional[str] = None, inline: bool = False):
    """One choice out of several; `choices` may map values to labels."""
    _check_id(input_id)
    items = _choice_items(choices)
    if not items:
        raise ValueError(f"Radio buttons {input_id!r} need at least one choice")
    selected = items[0][0] if selected is None else str(selected)
    buttons = [
        Label(
            Input(_on_change(), type="radio", name=input_id, value=value, checked=value == selected,
                  data_bind=input_id, cls="uk-radio mr-2"),
            text,
            cls="flex items-center" + (" mr-4" if inline else " mb-1"),
        )
        for value, text in items
    ]
    return _widget(
        input_id, {input_id: selected},
        Div(label, cls=_LABEL_CLS) if label else "",
        Div(*buttons, id=input_id, cls="flex flex-wrap" if inline else "flex flex-col"),
    )


def input_checkbox(input_id: str, label, value: bool = False):
    _check_id(input_id)
    return _widget(
        input_id, {input_id: bool(value)},
        Label(
            Input(_on_change(), type="checkbox", id=input_id, checked=bool(value),
                  data_bind=input_id, cls="uk-checkbox mr-2"),
            label,
            cls="flex items-center",
        ),
    )


def input_select(input_id: str, label, choices: Choices, *, selected=None, multiple: bool = False):
    """A drop-down. With `multiple`, the value is a list of the selected choices."""
    _check_id(input_id)
    items = _choice_items(choices)
    if multiple:
        default = [str(s) for s in (selected or [])]
    else:
        default = str(selected) if selected is not None else (items[0][0] if items else "")
    chosen = set(default) if multiple else {default}
    return _widget(
        input_id, {input_id: default},
        _label(input_id, label),
        Select(
            _on_change(),
            *[Option(text, value=value, selected=value in chosen) for value, text in items],
            id=input_id, multiple=multiple, data_bind=input_id, cls="uk-select",
        ),
    )


def input_date(input_id: str, label, value: Union[date, str, None] = None):
    """A date picker; the value is an ISO `YYYY-MM-DD` string."""
    _check_id(input_id)
    if value is None:
        value = date.today()
    value = value.isoformat() if isinstance(value, date) else str(value)
    return _widget(
        input_id, {input_id: value},
        _label(input_id, label),
        Input(_on_change(), type="date", id=input_id, value=value, data_bind=input_id, cls=_FIELD_CLS),
    )


def input_action_button(input_id: str, label, *, cls=ButtonT.primary):
    """A button whose value counts clicks, starting from 0."""
    _check_id(input_id)
    return _widget(
        input_id, {input_id: 0},
        Button(label, id=input_id, type="button", cls=f"uk-btn {cls}",
               data_on_click=f"${input_id} = ${input_id} + 1; {update_action()}"),
        kind="action",
    )


def input_file(input_id: str, label, *, accept: Optional[str] = None, multiple: bool = False):
    """
    File upload. Datastar reads the files into base64 signals
    (`<id>`, `<id>Names`, `<id>Mimes`); the server combines them into
    a list of FileInfo, or None while nothing has been uploaded.
    """
    _check_id(input_id)
    signals = {input_id: [], f"{input_id}Names": [], f"{input_id}Mimes": []}
    return _widget(
        input_id, signals,
        _label(input_id, label),
        Input(_on_change(), type="file", id=input_id, accept=accept, multiple=multiple,
              data_bind=input_id, cls="uk-input"),
        kind="file",
    )


def _walk(node):
    attrs = getattr(node, "attrs", None)
    if attrs is None and isinstance(node, (list, tuple)):
        for child in node:
            yield from _walk(child)
        return
    if not isinstance(attrs, dict):
        # Components with a __ft__ hook render to FT on demand
        if hasattr(node, "__ft__"):
            yield from _walk(node.__ft__())
        return
    yield node
    for child in getattr(node, "children", ()):
        yield from _walk(child)


def collect_inputs(tree) -> Dict[str, InputSpec]:
    """Find every widget in `tree` and return its declared id, default and kind."""
    specs: Dict[str, InputSpec] = {}
    for node in _walk(tree):
        input_id = node.attrs.get(INPUT_ATTR)
        if not input_id:
            continue
        signals = json.loads(node.attrs.get("data-signals") or "{}")
        kind = node.attrs.get(KIND_ATTR, "value")
        default = None if kind == "file" else signals.get(input_id)
        specs[input_id] = InputSpec(input_id, default, kind)
    return specs


def collect_defaults(tree) -> Dict[str, Any]:
    """Map every input id in `tree` to its declared default."""
    return {input_id: spec.default for input_id, spec in collect_inputs(tree).items()}
