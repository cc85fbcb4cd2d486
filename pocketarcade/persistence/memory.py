"""In-memory persistence, used by tests and headless runs."""

from typing import Dict, Optional

from pocketarcade.persistence.base import PersistenceService


class MemoryPersistence(PersistenceService):
    """Keeps blobs in a dict for the lifetime of the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, strict: bool = False):
        super().__init__(strict=strict)
        self.data: Dict[str, str] = dict(initial or {})

    async def _write(self, key: str, blob: str) -> None:
        self.data[key] = blob

    async def _read(self, key: str) -> Optional[str]:
        return self.data.get(key)
