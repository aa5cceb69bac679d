"""
StarLesson Session Storage

In-process repositories for browser sessions.
"""

from .base import SessionBackend
from .memory import MemoryRepo, get_memory_persistence

__all__ = [
    "SessionBackend",
    "MemoryRepo",
    "get_memory_persistence",
]
