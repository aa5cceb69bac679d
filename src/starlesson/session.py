"""
Browser Sessions

A Session is one open page: its reactive graph, the current value of every
input, and the output renderers bound to its placeholders. The server
function runs once per session; afterwards each interaction updates the
inputs and flushes the graph.
"""

import asyncio
import base64
import binascii
import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from .config import ReactiveConfig
from .core.reactive import ReactiveGraph, Value, isolate
from .errors import UnknownInputError
from .ui.widgets import InputSpec, SESSION_SIGNAL

logger = logging.getLogger(__name__)

_current_session: ContextVar[Optional['Session']] = ContextVar("starlesson_session", default=None)

_TRUE = {"true", "1", "yes", "on"}


class FileInfo(BaseModel):
    """One uploaded file, decoded from the Datastar file signals."""
    name: str
    mime: str = "application/octet-stream"
    size: int = 0
    content: bytes = b""

    @classmethod
    def from_base64(cls, name: str, mime: Optional[str], data: str) -> 'FileInfo':
        if data.startswith("data:") and "," in data:
            data = data.split(",", 1)[1]
        try:
            content = base64.b64decode(data, validate=False)
        except (binascii.Error, ValueError):
            logger.warning("Could not decode upload %r", name)
            content = b""
        return cls(name=name, mime=mime or "application/octet-stream", size=len(content), content=content)

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")


def coerce(raw: Any, default: Any) -> Any:
    """Convert a value sent by the browser to the type of the declared default."""
    if raw is None or default is None:
        return raw
    if isinstance(default, bool):
        if isinstance(raw, str):
            return raw.strip().lower() in _TRUE
        return bool(raw)
    if isinstance(default, (int, float)):
        if isinstance(raw, bool):
            return int(raw)
        if isinstance(raw, str):
            raw = raw.strip()
            if raw == "":
                return None
            try:
                raw = float(raw)
            except ValueError:
                return None
        if isinstance(raw, float) and raw.is_integer() and isinstance(default, int):
            return int(raw)
        return raw
    if isinstance(default, list):
        if isinstance(raw, (list, tuple)):
            return [str(v) for v in raw]
        return [] if raw == "" else [str(raw)]
    if isinstance(default, str) and not isinstance(raw, str):
        return str(raw)
    return raw


class Inputs:
    """
    The current input values of a session.

    `input.n()` or `input["n"]()` reads input `n` reactively.
    """

    def __init__(self):
        self._values: Dict[str, Value] = {}
        self._specs: Dict[str, InputSpec] = {}

    def declare(self, spec: InputSpec, reset: bool = False) -> bool:
        """
        Add an input; returns False when it already exists.

        An existing input keeps its value unless `reset` is set, in which
        case it takes the new spec and goes back to its default, the value
        the freshly rendered widget shows.
        """
        if spec.id == SESSION_SIGNAL:
            raise ValueError(f"Input id {spec.id!r} is reserved")
        if spec.id in self._values:
            if reset:
                self._specs[spec.id] = spec
                self._values[spec.id].set(spec.default)
            return False
        self._specs[spec.id] = spec
        self._values[spec.id] = Value(spec.default, name=spec.id)
        return True

    def declare_all(self, specs: Mapping[str, InputSpec], reset: bool = False) -> List[str]:
        return [input_id for input_id, spec in specs.items() if self.declare(spec, reset=reset)]

    def __getitem__(self, input_id: str) -> Value:
        try:
            return self._values[input_id]
        except KeyError:
            raise UnknownInputError(input_id) from None

    def __getattr__(self, name: str) -> Value:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __contains__(self, input_id: str) -> bool:
        return input_id in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def spec(self, input_id: str) -> InputSpec:
        return self._specs[input_id]

    def update(self, payload: Mapping[str, Any]) -> List[str]:
        """Apply browser values; unknown ids are ignored. Returns the ids that changed."""
        changed = []
        for input_id, value in self._values.items():
            if input_id not in payload:
                continue
            spec = self._specs[input_id]
            if spec.kind == "file":
                new = self._files(input_id, payload)
            else:
                new = coerce(payload[input_id], spec.default)
            if value.set(new):
                changed.append(input_id)
        return changed

    def _files(self, input_id: str, payload: Mapping[str, Any]) -> Optional[List[FileInfo]]:
        contents = payload.get(input_id) or []
        if not contents:
            return None
        names = payload.get(f"{input_id}Names") or []
        mimes = payload.get(f"{input_id}Mimes") or []
        files = []
        for i, data in enumerate(contents):
            name = names[i] if i < len(names) else f"upload-{i}"
            mime = mimes[i] if i < len(mimes) else None
            files.append(FileInfo.from_base64(name, mime, data))
        return files

    def snapshot(self) -> Dict[str, Any]:
        """Current values without taking dependencies; unset inputs are skipped."""
        result = {}
        with isolate():
            for input_id, value in self._values.items():
                if value.is_set():
                    result[input_id] = value.get()
        return result


class Outputs:
    """Renderers by output id, plus fragments rendered but not yet sent."""

    def __init__(self):
        self._renderers: Dict[str, Any] = {}
        self._pending: Dict[str, str] = {}

    def register(self, output_id: str, renderer) -> None:
        old = self._renderers.get(output_id)
        if old is not None and old is not renderer:
            old.destroy()
        self._renderers[output_id] = renderer

    def push(self, output_id: str, html: str) -> None:
        # Only the latest rendering of an output is sent
        self._pending.pop(output_id, None)
        self._pending[output_id] = html

    def drain(self) -> List[Tuple[str, str]]:
        pending, self._pending = self._pending, {}
        return list(pending.items())

    def __getitem__(self, output_id: str):
        return self._renderers[output_id]

    def __contains__(self, output_id: str) -> bool:
        return output_id in self._renderers

    def __iter__(self):
        return iter(self._renderers)

    def __len__(self) -> int:
        return len(self._renderers)


ServerFunction = Callable[[Inputs, Outputs, 'Session'], Any]


class Session:
    """One open page and its reactive state."""

    def __init__(self, session_id: Optional[str] = None, *, config: Optional[ReactiveConfig] = None):
        config = config or ReactiveConfig()
        self.id = session_id or uuid.uuid4().hex
        self.graph = ReactiveGraph(max_passes=config.max_flush_passes, max_errors=config.max_recorded_errors)
        self.input = Inputs()
        self.output = Outputs()
        self.lock = asyncio.Lock()
        self.created_at = time.time()
        self.last_seen = self.created_at
        self.user_data: Dict[str, Any] = {}

    @contextmanager
    def activate(self):
        token = _current_session.set(self)
        try:
            with self.graph.activate():
                yield self
        finally:
            _current_session.reset(token)

    def declare_inputs(self, specs: Mapping[str, InputSpec], reset: bool = False) -> List[str]:
        added = self.input.declare_all(specs, reset=reset)
        if added:
            logger.debug("Session %s declared inputs %s", self.id, added)
        return added

    def run_server(self, server: ServerFunction) -> None:
        """Call the server function once and flush the graph."""
        with self.activate():
            server(self.input, self.output, self)
            self.graph.flush()

    def flush(self) -> List[Tuple[str, str]]:
        """Run pending observers; return the fragments that changed."""
        with self.activate():
            self.graph.flush()
        return self.output.drain()

    def apply(self, payload: Mapping[str, Any]) -> List[Tuple[str, str]]:
        """Apply one browser update and return the changed output fragments."""
        self.touch()
        changed = self.input.update(payload)
        if changed:
            logger.debug("Session %s inputs changed: %s", self.id, changed)
        return self.flush()

    def touch(self) -> None:
        self.last_seen = time.time()

    def close(self) -> None:
        for output_id in list(self.output):
            self.output[output_id].destroy()

    def __repr__(self) -> str:
        return f"Session({self.id}, inputs={len(self.input)}, outputs={len(self.output)})"


def current_session() -> Optional[Session]:
    return _current_session.get()
