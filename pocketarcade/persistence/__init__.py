"""
Persistence services for saving game state between sessions.

Engines hand a key and a serialized blob to a ``PersistenceService``; the
service knows nothing about what the blob contains.
"""

from pocketarcade.persistence.base import PersistenceError, PersistenceService
from pocketarcade.persistence.memory import MemoryPersistence
from pocketarcade.persistence.files import FilePersistence
from pocketarcade.persistence.sqlite import SQLitePersistence

__all__ = [
    "PersistenceError",
    "PersistenceService",
    "MemoryPersistence",
    "FilePersistence",
    "SQLitePersistence",
]
