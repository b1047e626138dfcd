# src/storage/file_source.py — v1
"""File-access collaborators: fetch the raw bytes behind a record's path."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class BaseFileSource(ABC):
    """Resolves an opaque ``file_path`` locator to bytes."""

    @abstractmethod
    async def fetch_bytes(self, file_path: str) -> bytes | None:
        """Return the file's bytes, or None if nothing could be read."""


class LocalFileSource(BaseFileSource):
    """Reads files from the local filesystem, optionally under a root."""

    def __init__(self, root: Path | str | None = None) -> None:
        self._root = Path(root).expanduser() if root is not None else None

    def resolve(self, file_path: str) -> Path:
        path = Path(file_path).expanduser()
        if self._root is not None and not path.is_absolute():
            path = self._root / path
        return path

    async def fetch_bytes(self, file_path: str) -> bytes | None:
        path = self.resolve(file_path)
        if not path.is_file():
            logger.warning("File not found: %s", path)
            return None
        return await asyncio.to_thread(path.read_bytes)
