"""
Lesson App

Binds a UI tree and a server function to two routes:

- GET  {prefix}/         opens a session, runs the server function, serves the page
- POST {prefix}/_update  applies the Datastar signal store to the session's
                         inputs and streams every re-rendered output as a
                         `datastar-merge-fragments` event

The page asks for its first update on load, which delivers the outputs
rendered while the session was being set up.
"""

import inspect
import logging
import secrets
from typing import Any, Callable, Optional, Tuple

from fasthtml.common import *
from monsterui.all import Theme
from starlette.requests import Request

from ..config import ApplicationConfig, get_config
from ..errors import ReactiveCycleError, SessionNotFound
from ..persistence import SessionBackend, get_memory_persistence
from ..session import Session, ServerFunction
from ..ui import SESSION_SIGNAL, UPDATE_PATH, collect_inputs, session_signals, update_action
from .datastar import extract_datastar_payload, fragment_event, sse_response

logger = logging.getLogger(__name__)

datastar_script = Script(src="https://cdn.jsdelivr.net/gh/starfederation/datastar@v1.0.0-beta.11/bundles/datastar.js", type="module")

STATUS_ID = "starlesson-status"


def default_headers():
    return (Theme.blue.headers(highlightjs=True, apex_charts=True), datastar_script)


def status_message(message: str, level: str = "warning"):
    colors = {"warning": "text-amber-700", "error": "text-red-600", "info": "text-muted-foreground"}
    return Div(P(message, cls=colors.get(level, "")), id=STATUS_ID, role="status")


async def _events(*events):
    for event in events:
        yield event


class App:
    """
    One reactive page.

    Args:
        ui: UI tree, or a function of the request returning one
        server: `server(input, output, session)`, called once per page load
        title: Page title
        prefix: Path the page is mounted under ("" for the site root)
        layout: Wraps the UI tree before it is served (lesson prose, source...)
        repo: Session repository, the process-wide memory repo by default
    """

    def __init__(
        self,
        ui,
        server: ServerFunction,
        *,
        title: str = "StarLesson",
        prefix: str = "",
        layout: Optional[Callable[[Any], Any]] = None,
        repo: Optional[SessionBackend] = None,
        config: Optional[ApplicationConfig] = None,
    ):
        self.ui = ui
        self.server = server
        self.title = title
        self.prefix = prefix.rstrip("/")
        self.layout = layout
        self.config = config or get_config()
        self.repo = repo or get_memory_persistence()
        self.repo.configure_cleanup(self.config.session.auto_cleanup, self.config.session.cleanup_interval)

    @property
    def page_path(self) -> str:
        return f"{self.prefix}/"

    @property
    def update_path(self) -> str:
        return f"{self.prefix}/{UPDATE_PATH}"

    def build_ui(self, request: Optional[Request] = None):
        ui = self.ui
        if inspect.isfunction(ui) or inspect.ismethod(ui):
            ui = ui(request) if inspect.signature(ui).parameters else ui()
        return ui

    def start_session(self, request: Optional[Request] = None) -> Tuple[Session, Any]:
        """Create a session for a new page load and run the server function in it."""
        ui = self.build_ui(request)
        session = Session(config=self.config.reactive)
        session.declare_inputs(collect_inputs(ui))
        session.run_server(self.server)
        self.repo.save(session, ttl=self.config.session.ttl)
        logger.info("Started session %s on %s", session.id, self.page_path)
        return session, ui

    async def handle_page(self, request: Request):
        self.repo.start_cleanup()
        session, ui = self.start_session(request)
        content = self.layout(ui) if self.layout else ui
        return (
            Title(self.title),
            Main(
                session_signals(session.id),
                Div({"data-on-load": update_action()}, id="starlesson-loader", hidden=True),
                Div(id=STATUS_ID),
                content,
                cls="container mx-auto p-6 max-w-6xl",
            ),
        )

    async def handle_update(self, request: Request):
        payload = await extract_datastar_payload(request)
        try:
            session = self.repo.require(payload.get(SESSION_SIGNAL))
        except SessionNotFound as e:
            logger.info("Update rejected: %s", e)
            message = status_message("This session has expired. Reload the page to start again.")
            return sse_response(_events(fragment_event(to_xml(message))))

        async with session.lock:
            try:
                fragments = session.apply(payload.without(SESSION_SIGNAL))
            except ReactiveCycleError as e:
                logger.error("Session %s: %s", session.id, e)
                fragments = session.output.drain()
                fragments.append((STATUS_ID, to_xml(status_message(str(e), level="error"))))
                session.user_data["status_shown"] = True
            else:
                if session.user_data.pop("status_shown", False):
                    fragments.append((STATUS_ID, to_xml(Div(id=STATUS_ID, role="status"))))
            self.repo.save(session, ttl=self.config.session.ttl)

        return sse_response(_events(*[fragment_event(html) for _, html in fragments]))

    def register(self, app, name: Optional[str] = None) -> None:
        """Add the page and update routes to a FastHTML app."""
        name = name or (self.prefix.strip("/").replace("/", "_") or "index")

        async def page(request: Request):
            return await self.handle_page(request)

        async def update(request: Request):
            return await self.handle_update(request)

        app.route(self.page_path, methods=["get"], name=f"{name}_page")(page)
        app.route(self.update_path, methods=["post"], name=f"{name}_update")(update)

    def build(self):
        """A standalone FastHTML app serving just this page."""
        app, _ = fast_app(
            hdrs=default_headers(),
            htmx=False,
            pico=False,
            surreal=False,
            secret_key=self.config.web.secret_key or secrets.token_hex(16),
        )
        self.register(app)
        return app

    def run(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        """Serve this page with uvicorn until interrupted."""
        import uvicorn

        uvicorn.run(self.build(), host=host or self.config.web.host, port=port or self.config.web.port)
