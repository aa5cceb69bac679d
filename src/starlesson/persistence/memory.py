"""
StarLesson Session Storage - Memory Backend

Sessions hold live reactive graphs, so they can only ever live in the
process that created them.
"""

import logging
import time
from typing import Dict, Optional, TYPE_CHECKING

from .base import SessionBackend

if TYPE_CHECKING:
    from ..session import Session

logger = logging.getLogger(__name__)


class MemoryRepo(SessionBackend):
    """
    In-memory session repository (Singleton).

    Uses singleton pattern so every lesson app of a process shares one
    store and one cleanup task.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize memory repository (only once)."""
        if not self._initialized:
            super().__init__()
            self._data: Dict[str, 'Session'] = {}
            self._expiry: Dict[str, float] = {}
            self.default_ttl: Optional[int] = None
            MemoryRepo._initialized = True

    def save(self, session: 'Session', ttl: Optional[int] = None) -> bool:
        """Store session in memory with optional TTL."""
        key = session.id
        self._data[key] = session
        ttl = ttl or self.default_ttl
        if ttl:
            self._expiry[key] = time.time() + ttl
        elif key in self._expiry:
            del self._expiry[key]
        return True

    def load(self, key: str) -> Optional['Session']:
        """Load session from memory."""
        if not key:
            return None
        if self._expired(key):
            self._drop(key)
            return None
        return self._data.get(key)

    def delete(self, key: str) -> bool:
        """Delete session from memory."""
        existed = key in self._data
        self._drop(key)
        return existed

    def exists(self, key: str) -> bool:
        """Check if session exists in memory."""
        if self._expired(key):
            self._drop(key)
            return False
        return key in self._data

    def cleanup_expired(self) -> int:
        """Clean up expired sessions from memory."""
        now = time.time()
        expired_keys = [key for key, expiry_time in self._expiry.items() if now > expiry_time]
        for key in expired_keys:
            self._drop(key)
        return len(expired_keys)

    def clear(self) -> None:
        for key in list(self._data):
            self._drop(key)

    def __len__(self) -> int:
        return len(self._data)

    def _expired(self, key: str) -> bool:
        return key in self._expiry and time.time() > self._expiry[key]

    def _drop(self, key: str) -> None:
        session = self._data.pop(key, None)
        self._expiry.pop(key, None)
        if session is not None:
            session.close()
            logger.debug("Dropped session %s", key)


def get_memory_persistence() -> MemoryRepo:
    """Get the singleton memory repository instance."""
    return MemoryRepo()
