# src/storage/store_factory.py — v1
"""Factory: instantiate the record store from configuration."""

from __future__ import annotations

from filerenamer.config.settings import Settings
from filerenamer.storage.base_record_store import BaseRecordStore
from filerenamer.storage.memory_store import InMemoryRecordStore


def create_record_store(settings: Settings) -> BaseRecordStore:
    """Create the record store selected by RECORD_STORE_BACKEND.

    Raises:
        ValueError: If the backend is not supported.
    """
    if settings.record_store_backend == "memory":
        return InMemoryRecordStore()

    if settings.record_store_backend == "sqlite":
        from filerenamer.storage.sqlite_store import SqliteRecordStore
        return SqliteRecordStore(db_path=settings.record_store_path)

    raise ValueError(f"Unsupported record store: {settings.record_store_backend!r}")
