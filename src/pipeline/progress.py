# src/pipeline/progress.py — v1
"""Progress reporting for a single pipeline run.

A fresh ProgressState is created for every ``process_files`` call and handed
back to the caller. A host UI that wants live updates passes one listener,
which is called synchronously after every change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from filerenamer.core.models import TERMINAL_STATUSES

logger = logging.getLogger(__name__)

ProgressListener = Callable[["ProgressState"], None]


@dataclass
class ProgressState:
    """Mutable counters for one run. Only terminal transitions advance them."""

    total_files: int = 0
    processed_files: int = 0
    current_batch_size: int = 0
    current_batch_processed: int = 0
    current_file_name: str = ""
    current_status: str = ""
    is_processing: bool = False
    cancelled: bool = False
    listener: ProgressListener | None = field(default=None, repr=False, compare=False)

    @property
    def overall_progress(self) -> float:
        if self.total_files == 0:
            return 0.0
        return self.processed_files * 100.0 / self.total_files

    @property
    def batch_progress(self) -> float:
        if self.current_batch_size == 0:
            return 0.0
        return self.current_batch_processed * 100.0 / self.current_batch_size

    def initialize(self, total_files: int, batch_size: int) -> None:
        self.total_files = total_files
        self.processed_files = 0
        self.current_batch_size = min(batch_size, total_files)
        self.current_batch_processed = 0
        self.current_file_name = ""
        self.current_status = "Initializing..."
        self.is_processing = True
        self.cancelled = False
        self._notify()

    def start_batch(self, batch_size: int) -> None:
        self.current_batch_size = batch_size
        self.current_batch_processed = 0
        self._notify()

    def update(self, file_name: str, status: str) -> None:
        self.current_file_name = file_name
        self.current_status = status
        if status in TERMINAL_STATUSES:
            self.processed_files += 1
            self.current_batch_processed += 1
        self._notify()

    def mark_cancelled(self) -> None:
        self.cancelled = True
        self.current_status = "Cancelled"
        self._notify()

    def complete(self) -> None:
        self.is_processing = False
        if not self.cancelled:
            self.current_status = "Processing completed"
        self._notify()

    def reset(self) -> None:
        self.total_files = 0
        self.processed_files = 0
        self.current_batch_size = 0
        self.current_batch_processed = 0
        self.current_file_name = ""
        self.current_status = ""
        self.is_processing = False
        self.cancelled = False
        self._notify()

    def _notify(self) -> None:
        if self.listener is None:
            return
        try:
            self.listener(self)
        except Exception:
            # A broken UI callback must not fail the run
            logger.warning("Progress listener raised", exc_info=True)
