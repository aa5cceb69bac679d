"""
Datastar request helpers

Datastar sends the whole signal store with every action: as JSON body for
POST, or as the `datastar` query parameter for GET.
"""

import json
import logging
from typing import Any, Dict, Optional

from datastar_py import SSE_HEADERS
from datastar_py import ServerSentEventGenerator as SSE
from starlette.requests import Request
from starlette.responses import StreamingResponse

logger = logging.getLogger(__name__)


class DatastarPayload:
    """Represents Datastar payload data sent along with an action."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = data or {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def without(self, *keys: str) -> Dict[str, Any]:
        return {k: v for k, v in self._data.items() if k not in keys}

    def __repr__(self) -> str:
        return f"DatastarPayload({self._data})"


async def extract_datastar_payload(request: Request) -> DatastarPayload:
    """Extract Datastar payload from query params or the JSON body."""
    try:
        datastar_json_str = request.query_params.get('datastar')
        if datastar_json_str:
            data = json.loads(datastar_json_str)
        else:
            body = await request.body()
            data = json.loads(body) if body else {}
    except (ValueError, UnicodeDecodeError):
        logger.warning("Ignoring malformed Datastar payload on %s", request.url.path)
        data = {}
    if not isinstance(data, dict):
        data = {}
    return DatastarPayload(data)


def fragment_event(html: str, selector: Optional[str] = None, merge_mode: str = "morph") -> str:
    """A `datastar-merge-fragments` event for one rendered fragment."""
    if selector:
        return SSE.merge_fragments(html, selector=selector, merge_mode=merge_mode)
    return SSE.merge_fragments(html, merge_mode=merge_mode)


def sse_response(events) -> StreamingResponse:
    """Stream an (async) iterable of SSE events."""
    return StreamingResponse(events, media_type="text/event-stream", headers=SSE_HEADERS)
