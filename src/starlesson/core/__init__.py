"""
StarLesson Core Module

The reactive layer: values, reactive expressions, observers and event
gating, independent of any web framework.
"""

from .reactive import (
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
)
from .events import event
from ..errors import req, need, validate

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
]
