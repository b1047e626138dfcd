# src/pipeline/batch_processor.py — v2
"""Batch pipeline: fetch -> extract -> suggest -> persist, a few files at a time.

Pending records are split into fixed-size batches. Files within a batch run
concurrently on the event loop; batches run strictly one after another and
the record store is committed once per batch. A failing file is marked
``Error`` with the failure message in ``suggested_name`` and never stops its
siblings or later batches.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Sequence

from filerenamer.core.models import FileRecord
from filerenamer.extraction.base_extractor import BaseTextExtractor
from filerenamer.logging.context import clear_context, set_file_context, set_run_context
from filerenamer.naming.resolver import SuggestionResolver
from filerenamer.naming.sanitizer import strip_invalid_filename_chars, to_pdf_filename
from filerenamer.pipeline.progress import ProgressListener, ProgressState
from filerenamer.storage.base_record_store import BaseRecordStore
from filerenamer.storage.file_source import BaseFileSource

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 3


class EmptyFileError(Exception):
    """The file-access collaborator returned no bytes."""


class NoTextExtractedError(Exception):
    """The PDF parsed but contained no text."""


class NoSuggestionError(Exception):
    """The resolver returned a blank suggestion."""


class RenameError(Exception):
    """Persisting a rename failed."""


class _FileCancelled(Exception):
    """Cancellation observed inside a file task."""


def partition(records: Sequence[FileRecord], size: int) -> list[list[FileRecord]]:
    """Split ``records`` into consecutive chunks of at most ``size``."""
    return [list(records[i : i + size]) for i in range(0, len(records), size)]


def _is_cancelled(cancel_event: asyncio.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def _check_cancelled(cancel_event: asyncio.Event | None) -> None:
    if _is_cancelled(cancel_event):
        raise _FileCancelled()


class BatchProcessor:
    """Runs pending FileRecords through the rename pipeline."""

    def __init__(
        self,
        resolver: SuggestionResolver,
        extractor: BaseTextExtractor,
        file_source: BaseFileSource,
        record_store: BaseRecordStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._resolver = resolver
        self._extractor = extractor
        self._file_source = file_source
        self._record_store = record_store
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def process_files(
        self,
        records: Sequence[FileRecord],
        cancel_event: asyncio.Event | None = None,
        on_progress: ProgressListener | None = None,
    ) -> ProgressState:
        """Process every ``Pending`` record in ``records``, in place.

        Args:
            records: Records to consider; non-pending ones are left untouched.
            cancel_event: Set it to stop before the next batch. Files still
                in flight are put back to ``Pending``.
            on_progress: Optional listener for live progress updates.

        Returns:
            The run's final ProgressState.
        """
        pending = [r for r in records if r.is_pending]
        batches = partition(pending, self._batch_size)
        progress = ProgressState(listener=on_progress)
        progress.initialize(len(pending), self._batch_size)

        run_id = uuid.uuid4().hex[:12]
        set_run_context(run_id)
        logger.info(
            "Processing %d pending file(s) in %d batch(es) of up to %d",
            len(pending), len(batches), self._batch_size,
        )

        try:
            for index, batch in enumerate(batches, start=1):
                if _is_cancelled(cancel_event):
                    logger.info(
                        "Cancellation requested, skipping batches %d-%d",
                        index, len(batches),
                    )
                    progress.mark_cancelled()
                    break

                set_run_context(run_id, batch=index)
                progress.start_batch(len(batch))
                await asyncio.gather(
                    *(self._process_one(record, cancel_event, progress) for record in batch)
                )
                written = await self._record_store.commit()
                logger.info(
                    "Batch %d/%d done, %d record(s) committed", index, len(batches), written,
                )
            else:
                if _is_cancelled(cancel_event):
                    progress.mark_cancelled()
        finally:
            progress.complete()
            clear_context()

        return progress

    async def _process_one(
        self,
        record: FileRecord,
        cancel_event: asyncio.Event | None,
        progress: ProgressState,
    ) -> None:
        set_file_context(record.file_path)
        try:
            record.status = "Processing"
            progress.update(record.file_name, record.status)

            data = await self._file_source.fetch_bytes(record.file_path)
            _check_cancelled(cancel_event)
            if not data:
                raise EmptyFileError("File is empty or could not be read")

            text = await self._extractor.extract_text(data)
            _check_cancelled(cancel_event)
            if not text or not text.strip():
                raise NoTextExtractedError("No text could be extracted from the PDF")

            suggestion = await self._resolver.suggest_name(record.file_name, text)
            _check_cancelled(cancel_event)
            if not suggestion or not suggestion.strip():
                raise NoSuggestionError("Could not generate a suggested name")

            record.suggested_name = strip_invalid_filename_chars(suggestion.strip())
            record.status = "Completed"
            self._record_store.upsert(record)
            logger.debug("Suggested name for %s: %s", record.file_name, record.suggested_name)
        except _FileCancelled:
            record.status = "Pending"
            logger.info("Cancelled while processing %s, left pending", record.file_name)
            progress.update(record.file_name, "Cancelled")
            return
        except Exception as e:
            record.status = "Error"
            record.suggested_name = str(e) or type(e).__name__
            logger.warning("Failed to process %s: %s", record.file_name, record.suggested_name)
            self._stage_error(record)

        progress.update(record.file_name, record.status)

    def _stage_error(self, record: FileRecord) -> None:
        """Stage an errored record; a store failure here stays inside the file unit."""
        try:
            self._record_store.upsert(record)
        except Exception:
            logger.error("Could not stage error status for %s", record.file_path, exc_info=True)

    async def apply_rename(self, record: FileRecord) -> FileRecord:
        """Adopt the suggestion as the display name and persist it.

        Raises:
            RenameError: If the suggestion is blank or the store fails; the
                record is left with status ``Error``.
        """
        try:
            if not record.suggested_name.strip():
                raise ValueError("record has no suggested name")
            record.file_name = to_pdf_filename(record.suggested_name)
            record.status = "Renamed"
            self._record_store.upsert(record)
            await self._record_store.commit()
        except Exception as e:
            record.status = "Error"
            raise RenameError(f"Error renaming file: {e}") from e

        logger.info("Renamed %s -> %s", record.file_path, record.file_name)
        return record

    async def load_records(self) -> list[FileRecord]:
        """Committed records, for restoring a UI grid."""
        return await self._record_store.load_all()
