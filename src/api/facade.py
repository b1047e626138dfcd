# src/api/facade.py — v3
"""Public API facade: the single entry point a host UI talks to.

Usage:
    from filerenamer.api.facade import FileRenamer
    async with FileRenamer.from_settings() as renamer:
        records = await renamer.add_files(["invoices/scan_001.pdf"])
        progress = await renamer.process(records)
        await renamer.apply_rename(records[0])
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable

from filerenamer.cache.cache_factory import create_suggestion_cache
from filerenamer.config.settings import Settings
from filerenamer.core.models import FileRecord
from filerenamer.extraction.base_extractor import BaseTextExtractor
from filerenamer.extraction.pdf_extractor import PdfTextExtractor
from filerenamer.logging.logger import setup_logging_from_settings
from filerenamer.naming.resolver import ClientFactory, SuggestionResolver
from filerenamer.pipeline.batch_processor import BatchProcessor
from filerenamer.pipeline.progress import ProgressListener, ProgressState
from filerenamer.storage.base_record_store import BaseRecordStore
from filerenamer.storage.file_source import BaseFileSource, LocalFileSource
from filerenamer.storage.store_factory import create_record_store

logger = logging.getLogger(__name__)


class FileRenamer:
    """Wires settings, cache, providers, extractor and storage together."""

    def __init__(self, processor: BatchProcessor, record_store: BaseRecordStore) -> None:
        self._processor = processor
        self._record_store = record_store
        self._records: dict[str, FileRecord] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        record_store: BaseRecordStore | None = None,
        file_source: BaseFileSource | None = None,
        extractor: BaseTextExtractor | None = None,
        client_factory: ClientFactory | None = None,
        configure_logging: bool = True,
    ) -> FileRenamer:
        """Build a FileRenamer; any collaborator can be swapped in.

        Args:
            settings: Global settings. Loaded from .env if None.
            record_store: Defaults to the configured backend.
            file_source: Defaults to the local filesystem under FILE_ROOT.
            extractor: Defaults to the PyMuPDF extractor.
            client_factory: Provider name -> LLM client, for tests or hosts
                that manage SDK clients themselves.
            configure_logging: Apply the logging section of ``settings``.
        """
        settings = settings or Settings()
        if configure_logging:
            setup_logging_from_settings(settings)

        store = record_store or create_record_store(settings)
        resolver = SuggestionResolver(
            settings, create_suggestion_cache(settings), client_factory=client_factory,
        )
        processor = BatchProcessor(
            resolver=resolver,
            extractor=extractor or PdfTextExtractor(),
            file_source=file_source or LocalFileSource(settings.file_root),
            record_store=store,
            batch_size=settings.batch_size,
        )
        logger.info(
            "FileRenamer ready: provider=%s, fallback=%s, batch_size=%d, store=%s",
            settings.ai_provider, settings.ai_fallback_enabled,
            settings.batch_size, settings.record_store_backend,
        )
        return cls(processor, store)

    @property
    def processor(self) -> BatchProcessor:
        return self._processor

    async def load(self) -> list[FileRecord]:
        """Load committed records from storage into the session."""
        for record in await self._processor.load_records():
            self._records.setdefault(record.file_path, record)
        return self.records()

    async def add_files(self, paths: Iterable[str | Path]) -> list[FileRecord]:
        """Register selected files as ``Pending`` records.

        Paths already known to the session or the store are skipped.
        """
        added: list[FileRecord] = []
        for raw in paths:
            path = str(raw)
            if path in self._records:
                continue
            stored = await self._record_store.get_by_path(path)
            if stored is not None:
                self._records[path] = stored
                continue
            record = FileRecord(file_name=Path(path).name, file_path=path)
            self._records[path] = record
            added.append(record)
        logger.info("Added %d file(s)", len(added))
        return added

    async def process(
        self,
        records: list[FileRecord] | None = None,
        cancel_event: asyncio.Event | None = None,
        on_progress: ProgressListener | None = None,
    ) -> ProgressState:
        """Process ``records`` (default: every record in the session)."""
        targets = records if records is not None else self.records()
        return await self._processor.process_files(
            targets, cancel_event=cancel_event, on_progress=on_progress,
        )

    async def apply_rename(self, record: FileRecord) -> FileRecord:
        return await self._processor.apply_rename(record)

    def records(self) -> list[FileRecord]:
        """Session records in insertion order."""
        return list(self._records.values())

    def close(self) -> None:
        """Release the record store (closes the SQLite connection)."""
        self._record_store.close()
        logger.debug("FileRenamer closed")

    async def __aenter__(self) -> FileRenamer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
