"""Managers for projectshelf storage."""

from .kv import KVManager
from .projects import (
    ProjectStore,
    ProjectIndexError,
    ProjectNotFoundError,
    PersistenceError,
)

__all__ = [
    "KVManager",
    "ProjectStore",
    "ProjectIndexError",
    "ProjectNotFoundError",
    "PersistenceError",
]
