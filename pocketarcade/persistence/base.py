"""
Base persistence interface.

Backends store opaque string blobs under string keys. Failures are
reported, not raised: ``save`` returns False and ``load`` returns None, so
a broken store can never block gameplay. Pass ``strict=True`` to raise
``PersistenceError`` instead.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Type

logger = logging.getLogger("pocketarcade.persistence")


class PersistenceError(Exception):
    """Raised by a strict persistence service when a read or write fails."""


class PersistenceService(ABC):
    """
    Asynchronous key-value store for serialized game state.

    Subclasses implement ``_write`` and ``_read``; this class turns their
    exceptions into the success/absent contract.
    """

    # Exceptions treated as a failed read or write
    errors: Tuple[Type[Exception], ...] = (OSError, ValueError)

    def __init__(self, strict: bool = False):
        self.strict = strict

    @abstractmethod
    async def _write(self, key: str, blob: str) -> None:
        """Store ``blob`` under ``key``, raising on failure."""

    @abstractmethod
    async def _read(self, key: str) -> Optional[str]:
        """Return the blob under ``key``, None when absent, raising on failure."""

    def _failed(self, action: str, key: str, error: Exception) -> None:
        logger.warning(f"Failed to {action} {key!r}: {error}")
        if self.strict:
            raise PersistenceError(f"Failed to {action} {key!r}") from error

    async def save(self, key: str, blob: str) -> bool:
        """
        Store a blob.

        Args:
            key: Storage key
            blob: Serialized state

        Returns:
            True on success, False on failure
        """
        try:
            await self._write(key, blob)
        except self.errors as e:
            self._failed("save", key, e)
            return False
        logger.debug(f"Saved {key!r} ({len(blob)} chars)")
        return True

    async def load(self, key: str) -> Optional[str]:
        """
        Fetch a blob.

        Returns:
            The stored blob, or None when absent or unreadable
        """
        try:
            return await self._read(key)
        except self.errors as e:
            self._failed("load", key, e)
            return None

    async def save_json(self, key: str, data: Any) -> bool:
        """Serialize ``data`` as JSON and store it."""
        try:
            blob = json.dumps(data, ensure_ascii=False, sort_keys=True)
        except (TypeError, ValueError) as e:
            self._failed("encode", key, e)
            return False
        return await self.save(key, blob)

    async def load_json(self, key: str) -> Optional[Any]:
        """Load and decode a JSON blob; undecodable data counts as absent."""
        blob = await self.load(key)
        if blob is None:
            return None
        try:
            return json.loads(blob)
        except ValueError as e:
            self._failed("decode", key, e)
            return None
