"""
StarLesson Session Storage - Base Classes

Abstract interface for session repositories with optional TTL support and
a background cleanup task.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

from ..errors import SessionNotFound

if TYPE_CHECKING:
    from ..session import Session

logger = logging.getLogger(__name__)


class SessionBackend(ABC):
    """
    Abstract base class for session repositories.

    Implementations must provide methods for saving, loading and dropping
    sessions, and for removing expired ones.
    """

    def __init__(self):
        """Initialize backend with cleanup configuration."""
        self._cleanup_task: Optional[asyncio.Task] = None
        self._cleanup_interval: int = 300  # 5 minutes default
        self._auto_cleanup: bool = True
        self._running: bool = False

    @abstractmethod
    def save(self, session: 'Session', ttl: Optional[int] = None) -> bool:
        """
        Store a session, refreshing its expiry.

        Args:
            session: Session to store
            ttl: Time-to-live in seconds (optional)

        Returns:
            True if the session was stored
        """

    @abstractmethod
    def load(self, session_id: str) -> Optional['Session']:
        """Return the session, or None when unknown or expired."""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Drop a session. Returns True if it existed."""

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """Check if a live session with this id exists."""

    @abstractmethod
    def cleanup_expired(self) -> int:
        """
        Drop expired sessions.

        Returns:
            Number of sessions dropped
        """

    def require(self, session_id: Optional[str]) -> 'Session':
        """Like `load`, but raises SessionNotFound instead of returning None."""
        session = self.load(session_id) if session_id else None
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def configure_cleanup(self, enabled: bool = True, interval: int = 300) -> None:
        """
        Configure automatic cleanup behavior.

        Args:
            enabled: Whether to enable automatic cleanup
            interval: Cleanup interval in seconds
        """
        self._auto_cleanup = enabled
        self._cleanup_interval = interval

        # Restart cleanup task if configuration changed and backend is running
        if self._running and self._cleanup_task:
            self.stop_cleanup()
            if enabled:
                self.start_cleanup()

    def start_cleanup(self) -> None:
        """Start the background cleanup task if auto_cleanup is enabled."""
        if not self._auto_cleanup or self._cleanup_task:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop running - cleanup will start with the first request
            return
        self._cleanup_task = loop.create_task(self._cleanup_loop())
        self._running = True

    def stop_cleanup(self) -> None:
        """Stop the background cleanup task."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            self._cleanup_task = None
        self._running = False

    @property
    def cleanup_running(self) -> bool:
        return self._running

    async def _cleanup_loop(self) -> None:
        """Internal cleanup loop that runs periodically."""
        while True:
            try:
                await asyncio.sleep(self._cleanup_interval)
                cleaned = self.cleanup_expired()
                if cleaned > 0:
                    logger.info("%s: cleaned up %d expired sessions", self.__class__.__name__, cleaned)
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("%s: error during cleanup", self.__class__.__name__)
