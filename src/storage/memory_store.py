# src/storage/memory_store.py — v1
"""In-memory record store for tests and throwaway sessions."""

from __future__ import annotations

import itertools

from filerenamer.core.models import FileRecord
from filerenamer.storage.base_record_store import BaseRecordStore


class InMemoryRecordStore(BaseRecordStore):
    """Dict-backed store; committed records are stored as copies."""

    def __init__(self) -> None:
        self._committed: dict[str, FileRecord] = {}
        self._staged: dict[str, FileRecord] = {}
        self._ids = itertools.count(1)
        self.commit_count = 0

    async def load_all(self) -> list[FileRecord]:
        return sorted(
            (r.model_copy() for r in self._committed.values()),
            key=lambda r: r.id or 0,
        )

    async def get_by_path(self, file_path: str) -> FileRecord | None:
        record = self._committed.get(file_path)
        return record.model_copy() if record else None

    def upsert(self, record: FileRecord) -> None:
        self._staged[record.file_path] = record

    async def commit(self) -> int:
        written = 0
        for path, record in self._staged.items():
            existing = self._committed.get(path)
            if existing is not None:
                record.id = existing.id
            elif record.id is None:
                record.id = next(self._ids)
            self._committed[path] = record.model_copy()
            written += 1
        self._staged.clear()
        self.commit_count += 1
        return written

    @property
    def pending_count(self) -> int:
        return len(self._staged)
