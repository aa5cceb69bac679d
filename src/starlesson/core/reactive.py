"""
Reactive Graph - Values, Reactive Expressions and Observers

🔄 Automatic recomputation:
Every read of a Value or Calc made while a computation is running records
that computation as a dependent. Writing a Value invalidates its
dependents; invalidated Calcs drop their cache and pass the invalidation
on, invalidated Effects are queued on their graph and rerun on flush().

Key pieces:
- Value: a writable reactive source (one per input widget)
- Calc: a cached reactive expression, lazily recomputed when read
- Effect: a side-effect observer, eagerly rerun on flush
- ReactiveGraph: the per-session queue of pending effects
"""

import functools
import heapq
import itertools
import logging
from collections import deque
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Deque, Dict, Generic, List, Optional, Tuple, TypeVar

from ..errors import ReactiveCycleError, SilentException

logger = logging.getLogger(__name__)

T = TypeVar('T')


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_current_context: ContextVar[Optional['Context']] = ContextVar("starlesson_context", default=None)
_current_graph: ContextVar[Optional['ReactiveGraph']] = ContextVar("starlesson_graph", default=None)


class Context:
    """One run of a Calc or Effect. Invalidated at most once."""

    _ids = itertools.count(1)

    def __init__(self):
        self.id = next(self._ids)
        self.invalidated = False
        self._callbacks: List[Callable[[], None]] = []

    def on_invalidate(self, callback: Callable[[], None]) -> None:
        if self.invalidated:
            callback()
        else:
            self._callbacks.append(callback)

    def invalidate(self) -> None:
        if self.invalidated:
            return
        self.invalidated = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    @contextmanager
    def run(self):
        token = _current_context.set(self)
        try:
            yield self
        finally:
            _current_context.reset(token)


def current_context() -> Optional[Context]:
    return _current_context.get()


class Dependents:
    """The set of contexts that read a reactive source during their last run."""

    def __init__(self):
        self._contexts: Dict[int, Context] = {}

    def register(self) -> None:
        ctx = _current_context.get()
        if ctx is None or ctx.id in self._contexts:
            return
        self._contexts[ctx.id] = ctx
        ctx.on_invalidate(lambda: self._contexts.pop(ctx.id, None))

    def invalidate(self) -> None:
        for ctx in list(self._contexts.values()):
            ctx.invalidate()

    def __len__(self) -> int:
        return len(self._contexts)


@contextmanager
def isolate():
    """Read reactive sources without taking a dependency on them."""
    token = _current_context.set(None)
    try:
        yield
    finally:
        _current_context.reset(token)


class Value(Generic[T]):
    """
    A writable reactive source.

    Reading records the running Calc/Effect as a dependent; setting a
    different value invalidates them. Reading an unset Value cancels the
    reader with SilentException.
    """

    def __init__(self, value: T = MISSING, *, name: Optional[str] = None):
        self.name = name
        self._value = value
        self._dependents = Dependents()

    def get(self) -> T:
        self._dependents.register()
        if self._value is MISSING:
            raise SilentException()
        return self._value

    __call__ = get

    def set(self, value: T) -> bool:
        """Store `value`; returns True when it differs from the current one."""
        if _same(self._value, value):
            return False
        self._value = value
        self._dependents.invalidate()
        return True

    def unset(self) -> None:
        self.set(MISSING)

    def is_set(self) -> bool:
        self._dependents.register()
        return self._value is not MISSING

    def __repr__(self) -> str:
        with isolate():
            return f"Value({self.name or ''}={self._value!r})"


def _same(old: Any, new: Any) -> bool:
    if old is new:
        return True
    if old is MISSING or new is MISSING:
        return False
    if type(old) is not type(new) and not (isinstance(old, (int, float)) and isinstance(new, (int, float))):
        return False
    try:
        return bool(old == new)
    except Exception:
        return False


class Calc(Generic[T]):
    """
    A reactive expression.

    The result is cached and only recomputed when a dependency changed and
    something reads the Calc again. Exceptions raised by the function are
    cached just like values.
    """

    def __init__(self, fn: Callable[[], T], *, name: Optional[str] = None):
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "calc")
        self.run_count = 0
        self._dependents = Dependents()
        self._valid = False
        self._running = False
        self._value: Any = None
        self._error: Optional[BaseException] = None
        functools.update_wrapper(self, fn)

    def __call__(self) -> T:
        self._dependents.register()
        if self._running:
            raise ReactiveCycleError(f"Reactive expression {self.name!r} depends on itself")
        if not self._valid:
            self._update()
        if self._error is not None:
            raise self._error
        return self._value

    def _update(self) -> None:
        ctx = Context()
        ctx.on_invalidate(self._invalidated)
        self._running = True
        self.run_count += 1
        try:
            with ctx.run():
                self._value, self._error = self._fn(), None
        except ReactiveCycleError:
            self._valid = False
            raise
        except Exception as e:
            self._value, self._error = None, e
        finally:
            self._running = False
        # A dependency may have changed while the function was running
        self._valid = not ctx.invalidated

    def _invalidated(self) -> None:
        self._valid = False
        self._value, self._error = None, None
        self._dependents.invalidate()

    def __repr__(self) -> str:
        return f"Calc({self.name}, valid={self._valid})"


class Effect:
    """
    A side-effect observer.

    Runs on the first flush after creation and again on the flush after
    any dependency changes. SilentException stops a run quietly; other
    errors are logged and recorded on the graph.
    """

    def __init__(
        self,
        fn: Callable[[], Any],
        *,
        priority: int = 0,
        name: Optional[str] = None,
        graph: Optional['ReactiveGraph'] = None,
    ):
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "effect")
        self.priority = priority
        self.graph = graph or current_graph()
        self.run_count = 0
        self._ctx: Optional[Context] = None
        self._scheduled = False
        self._destroyed = False
        self._schedule()

    def _schedule(self) -> None:
        if self._destroyed or self._scheduled:
            return
        self._scheduled = True
        self.graph.enqueue(self)

    def run(self) -> None:
        self._scheduled = False
        if self._destroyed:
            return
        ctx = Context()
        self._ctx = ctx
        ctx.on_invalidate(self._schedule)
        self.run_count += 1
        try:
            with ctx.run():
                self._fn()
        except SilentException:
            pass
        except ReactiveCycleError:
            raise
        except Exception as e:
            logger.exception("Observer %r failed", self.name)
            self.graph.errors.append((self.name, e))

    def destroy(self) -> None:
        self._destroyed = True
        if self._ctx is not None:
            self._ctx.invalidate()

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def __repr__(self) -> str:
        return f"Effect({self.name}, priority={self.priority})"


class ReactiveGraph:
    """Pending effects for one session, run in priority order by flush()."""

    def __init__(self, max_passes: int = 1000, max_errors: int = 100):
        self.max_passes = max_passes
        # Most recent observer failures only
        self.errors: Deque[Tuple[str, Exception]] = deque(maxlen=max_errors)
        self._pending: List[Tuple[int, int, Effect]] = []
        self._seq = itertools.count()
        self._flushing = False

    def enqueue(self, effect: Effect) -> None:
        heapq.heappush(self._pending, (-effect.priority, next(self._seq), effect))

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def flush(self) -> int:
        """Run pending effects until none are left. Returns the number of runs."""
        if self._flushing:
            return 0
        self._flushing = True
        runs = 0
        try:
            with self.activate():
                while self._pending:
                    if runs >= self.max_passes:
                        for _, _, dropped in self._pending:
                            dropped._scheduled = False
                        self._pending.clear()
                        raise ReactiveCycleError(
                            f"Reactive graph did not settle after {self.max_passes} observer runs"
                        )
                    _, _, effect = heapq.heappop(self._pending)
                    effect.run()
                    runs += 1
        finally:
            self._flushing = False
        return runs

    @contextmanager
    def activate(self):
        token = _current_graph.set(self)
        try:
            yield self
        finally:
            _current_graph.reset(token)


_default_graph = ReactiveGraph()


def current_graph() -> ReactiveGraph:
    """The graph new Effects attach to: the active session's, or a process default."""
    return _current_graph.get() or _default_graph


def flush() -> int:
    return current_graph().flush()


def calc(fn: Optional[Callable[[], T]] = None, *, name: Optional[str] = None):
    """Decorator form of Calc: `@calc` or `@calc(name=...)`."""
    if fn is not None:
        return Calc(fn, name=name)
    return lambda f: Calc(f, name=name)


def effect(fn: Optional[Callable[[], Any]] = None, *, priority: int = 0, name: Optional[str] = None):
    """Decorator form of Effect: `@effect` or `@effect(priority=1)`."""
    if fn is not None:
        return Effect(fn, priority=priority, name=name)
    return lambda f: Effect(f, priority=priority, name=name)
