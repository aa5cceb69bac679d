"""
StarLesson Lessons

Each lesson module defines TITLE, SUMMARY (paragraphs of prose), `app_ui`
and `server(input, output, session)`. LESSONS lists them in reading order.
"""

import inspect
from dataclasses import dataclass
from types import ModuleType
from typing import Any, List, Optional

from ..session import ServerFunction
from . import conditional, dynamic_ui, events, file_upload, inputs, observers, outputs, reactive_calc


@dataclass
class Lesson:
    slug: str
    title: str
    summary: List[str]
    ui: Any
    server: ServerFunction
    module: Optional[ModuleType] = None

    @classmethod
    def from_module(cls, module: ModuleType, slug: Optional[str] = None) -> "Lesson":
        slug = slug or module.__name__.rsplit(".", 1)[-1].replace("_", "-")
        return cls(
            slug=slug,
            title=module.TITLE,
            summary=list(module.SUMMARY),
            ui=module.app_ui,
            server=module.server,
            module=module,
        )

    @property
    def source(self) -> str:
        """Source code of the lesson module, shown next to the live example."""
        if self.module is None:
            return inspect.getsource(self.server)
        return inspect.getsource(self.module)


LESSONS = [
    Lesson.from_module(module)
    for module in (inputs, outputs, dynamic_ui, file_upload, reactive_calc, observers, events, conditional)
]


def get_lesson(slug: str) -> Optional[Lesson]:
    return next((lesson for lesson in LESSONS if lesson.slug == slug), None)


__all__ = ["Lesson", "LESSONS", "get_lesson"]
