# src/storage/base_record_store.py — v2
"""Abstract record store interface.

Records are keyed by ``file_path``. ``upsert`` only stages a record; nothing
is durable until ``commit`` flushes every staged record in one go, which the
batch pipeline does once per batch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from filerenamer.core.models import FileRecord


class RecordStoreError(Exception):
    """Raised when the backing store cannot load or persist records."""


class BaseRecordStore(ABC):
    """Unified interface for FileRecord persistence backends."""

    @abstractmethod
    async def load_all(self) -> list[FileRecord]:
        """Return every committed record, ordered by id."""

    @abstractmethod
    async def get_by_path(self, file_path: str) -> FileRecord | None:
        """Return the committed record for ``file_path``, if any."""

    @abstractmethod
    def upsert(self, record: FileRecord) -> None:
        """Stage ``record``: overwrite the record with the same path, else insert."""

    @abstractmethod
    async def commit(self) -> int:
        """Persist all staged records; return how many were written.

        Records inserted for the first time get their ``id`` assigned here.
        """

    @property
    @abstractmethod
    def pending_count(self) -> int:
        """Number of staged, uncommitted records."""

    def close(self) -> None:
        """Release backend resources. The default has none to release."""
