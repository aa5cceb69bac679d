"""
Event Gating

The @event decorator makes a reactive function depend only on explicit
triggers (usually action buttons). Everything the body reads is isolated.

    @effect
    @event(input.go)
    def _():
        log.info("clicked with n=%s", input.n())
"""

import functools
from typing import Any, Callable

from ..errors import SilentException
from .reactive import isolate


def _is_none_like(value: Any) -> bool:
    # An action button that was never clicked reports 0
    if value is None:
        return True
    return isinstance(value, int) and not isinstance(value, bool) and value == 0


def event(*triggers: Callable[[], Any], ignore_none: bool = True, ignore_init: bool = False):
    """
    Gate a reactive function on `triggers`.

    Args:
        triggers: Zero-argument callables (input Values, Calcs) to depend on
        ignore_none: Cancel silently when every trigger is None or 0
        ignore_init: Cancel silently on the very first run
    """
    if not triggers:
        raise TypeError("event() requires at least one trigger")
    for trigger in triggers:
        if not callable(trigger):
            raise TypeError(f"event() triggers must be callable, got {trigger!r}")

    def decorator(fn):
        initialized = False

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            nonlocal initialized
            values = [trigger() for trigger in triggers]
            first_run = not initialized
            initialized = True
            if ignore_init and first_run:
                raise SilentException()
            if ignore_none and all(_is_none_like(v) for v in values):
                raise SilentException()
            with isolate():
                return fn(*args, **kwargs)

        wrapper._event_triggers = triggers
        return wrapper

    return decorator
