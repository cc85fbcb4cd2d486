"""
File-backed persistence.

Each key is stored as ``<directory>/<key>.json``. Writes go to a temporary
file first and are renamed into place, so a crash mid-write leaves the
previous save intact.
"""

import os
import re
from pathlib import Path
from typing import Optional, Union

import aiofiles

from pocketarcade.persistence.base import PersistenceService

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FilePersistence(PersistenceService):
    """Stores one UTF-8 file per key in a directory."""

    def __init__(self, directory: Union[str, Path], strict: bool = False):
        super().__init__(strict=strict)
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    async def _write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as f:
            await f.write(blob)
        os.replace(tmp_path, path)

    async def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
            return await f.read()
