"""
StarLesson Exceptions

Every error raised by the reactive graph, the session layer and the
output renderers derives from StarLessonError.
"""

from typing import Optional


class StarLessonError(Exception):
    """Base class for all StarLesson errors."""


class SilentException(StarLessonError):
    """
    Cancel the current reactive computation without reporting an error.

    Raised by `req()` and by reading an input that has no value yet.
    Renderers clear their placeholder, effects simply stop.
    """


class ValidationError(StarLessonError):
    """A user-facing message produced by `validate()`. Shown in the placeholder."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ReactiveCycleError(StarLessonError):
    """A reactive expression read itself, or a flush never settled."""


class UnknownInputError(StarLessonError, KeyError):
    """An input id was read that no widget declared."""

    def __init__(self, input_id: str):
        super().__init__(input_id)
        self.input_id = input_id

    def __str__(self) -> str:
        return f"No input named {self.input_id!r} has been declared"


class SessionNotFound(StarLessonError):
    """The session id sent by the browser is unknown or has expired."""

    def __init__(self, session_id: Optional[str]):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session {self.session_id!r} not found or expired"


def need(condition, message: str) -> Optional[str]:
    """Return `message` when `condition` is falsy, otherwise None."""
    return None if condition else message


def validate(*messages: Optional[str]) -> None:
    """Raise ValidationError with the first non-empty message, if any."""
    for message in messages:
        if message:
            raise ValidationError(message)


def req(*values):
    """
    Require every value to be truthy.

    Cancels the calling computation silently on the first falsy value
    (None, "", 0, False, empty collections). Returns the first value so it
    can be used inline: `name = req(input.name())`.
    """
    for value in values:
        if not value:
            raise SilentException()
    return values[0] if values else None
