# src/core/models.py — v2
"""Core domain models shared across modules: FileRecord and FileStatus.

A FileRecord is created by the host UI with status ``Pending`` and is mutated
only by the batch pipeline and the apply-rename operation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

FileStatus = Literal["Pending", "Processing", "Completed", "Error", "Renamed"]

# Statuses that count a file as processed for progress reporting.
TERMINAL_STATUSES: frozenset[str] = frozenset({"Completed", "Error"})


class FileRecord(BaseModel):
    """One PDF file under management."""

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    file_name: str
    file_path: str
    suggested_name: str = ""
    status: FileStatus = "Pending"

    @property
    def is_pending(self) -> bool:
        return self.status == "Pending"
