"""
The tutorial site: an index page with the introduction and one reactive page
per lesson, mounted under /lessons/<slug>/ of a single FastHTML app.
"""

import logging
import secrets
from typing import List, Optional

from fasthtml.common import *
from monsterui.all import AT, Card, TextPresets, render_md

from .app import App, default_headers
from .config import ApplicationConfig, get_config
from .lessons import LESSONS, Lesson
from .persistence import SessionBackend, get_memory_persistence
from .ui import page

logger = logging.getLogger(__name__)

INTRO = """
A reactive web page has two halves. The **UI** declares the controls the
user can change and empty placeholders for results. The **server function**
reads the controls through `input` and fills the placeholders with
`@render` functions.

You never wire a control to an output by hand. Every render function
remembers which inputs it read, and when one of them changes in the browser
only the outputs that depend on it are computed again and sent back.

Each lesson below shows the idea, the running example and its full source.
"""


def lesson_path(lesson: Lesson) -> str:
    return f"/lessons/{lesson.slug}/"


def lesson_nav(lessons: List[Lesson], index: int):
    prev_link = A(f"← {lessons[index - 1].title}", href=lesson_path(lessons[index - 1])) if index > 0 else Span()
    next_link = A(f"{lessons[index + 1].title} →", href=lesson_path(lessons[index + 1])) if index + 1 < len(lessons) else Span()
    return Nav(
        prev_link,
        A("All lessons", href="/", cls=TextPresets.muted_sm),
        next_link,
        cls="flex justify-between items-center my-6",
    )


def lesson_layout(lessons: List[Lesson], index: int):
    """Wraps a lesson's UI with its prose, navigation and source listing."""
    lesson = lessons[index]

    def layout(ui):
        return page(
            lesson.title,
            lesson_nav(lessons, index),
            Div(*[render_md(paragraph) for paragraph in lesson.summary], cls="prose max-w-none mb-6"),
            Section(ui, cls="starlesson-example"),
            Card(
                Pre(Code(lesson.source, cls="language-python"), cls="text-sm overflow-x-auto"),
                header=H4("Source"),
                cls="mt-8",
            ),
            subtitle=f"Lesson {index + 1} of {len(lessons)}",
        )

    return layout


def index_page(lessons: List[Lesson]):
    cards = [
        Card(
            Div(render_md(lesson.summary[0]), cls="mb-4") if lesson.summary else "",
            A("Open lesson →", href=lesson_path(lesson), cls=AT.primary),
            header=H4(f"{i + 1}. {lesson.title}"),
        )
        for i, lesson in enumerate(lessons)
    ]
    return (
        Title("StarLesson"),
        Main(
            page(
                "Reactive web pages in Python",
                Div(render_md(INTRO), cls="prose max-w-none mb-8"),
                Div(*cards, cls="grid grid-cols-1 md:grid-cols-2 gap-6"),
                subtitle="A tutorial in small, runnable lessons",
            ),
            cls="container mx-auto p-6 max-w-6xl",
        ),
    )


class Tutorial:
    """
    Mounts a list of lessons on one app.

    Args:
        lessons: Lessons in reading order
        config: Application configuration, the global one by default
        repo: Session repository shared by every lesson page
    """

    def __init__(
        self,
        lessons: Optional[List[Lesson]] = None,
        *,
        config: Optional[ApplicationConfig] = None,
        repo: Optional[SessionBackend] = None,
    ):
        self.lessons = list(LESSONS if lessons is None else lessons)
        self.config = config or get_config()
        self.repo = repo or get_memory_persistence()
        self.pages = {
            lesson.slug: App(
                lesson.ui,
                lesson.server,
                title=f"{lesson.title} | StarLesson",
                prefix=lesson_path(lesson),
                layout=lesson_layout(self.lessons, i),
                repo=self.repo,
                config=self.config,
            )
            for i, lesson in enumerate(self.lessons)
        }

    def register(self, app) -> None:
        lessons = self.lessons

        async def index():
            return index_page(lessons)

        app.route("/", methods=["get"], name="index")(index)
        for slug, lesson_app in self.pages.items():
            lesson_app.register(app, name=slug.replace("-", "_"))
        logger.info("Mounted %d lessons", len(self.pages))

    def build(self):
        app, _ = fast_app(
            hdrs=default_headers(),
            htmx=False,
            pico=False,
            surreal=False,
            secret_key=self.config.web.secret_key or secrets.token_hex(16),
        )
        self.register(app)
        return app


def create_app(config: Optional[ApplicationConfig] = None, lessons: Optional[List[Lesson]] = None):
    """The tutorial as a FastHTML (Starlette) application."""
    return Tutorial(lessons, config=config).build()
