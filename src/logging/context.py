# src/logging/context.py — v2
"""Contextual logging support: attach run_id, batch and file_path to log records.

Each file task in a batch runs in its own asyncio task, so the context
variables set inside one task never leak into its siblings.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_batch: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "batch", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)
_provider: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "provider", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    batch: int | None = None
    file_path: str | None = None
    provider: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        batch=_batch.get(),
        file_path=_file_path.get(),
        provider=_provider.get(),
    )


def set_run_context(run_id: str, batch: int | None = None) -> None:
    """Set run-level context (called once per pipeline run and per batch)."""
    _run_id.set(run_id)
    _batch.set(batch)


def set_file_context(file_path: str) -> None:
    """Set file-level context (called at the start of each file task)."""
    _file_path.set(file_path)


def set_provider_context(provider: str | None) -> None:
    """Set the provider currently being asked for a suggestion."""
    _provider.set(provider)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _batch.set(None)
    _file_path.set(None)
    _provider.set(None)
