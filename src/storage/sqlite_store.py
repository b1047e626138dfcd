# src/storage/sqlite_store.py — v1
"""SQLite-backed record store (RECORD_STORE_BACKEND=sqlite).

Uses stdlib sqlite3. One ``files`` table with a unique ``file_path``; a
commit writes every staged record inside a single transaction.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from filerenamer.core.models import FileRecord
from filerenamer.storage.base_record_store import BaseRecordStore, RecordStoreError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS files (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    file_name TEXT NOT NULL,
    file_path TEXT NOT NULL UNIQUE,
    suggested_name TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL DEFAULT 'Pending',
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_files_status ON files(status);
"""

_UPSERT = """
INSERT INTO files (file_name, file_path, suggested_name, status)
VALUES (?, ?, ?, ?)
ON CONFLICT(file_path) DO UPDATE SET
    file_name = excluded.file_name,
    suggested_name = excluded.suggested_name,
    status = excluded.status,
    updated_at = CURRENT_TIMESTAMP
"""


class SqliteRecordStore(BaseRecordStore):
    """SQLite-backed FileRecord store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        self._staged: dict[str, FileRecord] = {}

    async def load_all(self) -> list[FileRecord]:
        cursor = self._conn.execute(
            "SELECT id, file_name, file_path, suggested_name, status FROM files ORDER BY id"
        )
        return [self._row_to_record(row) for row in cursor.fetchall()]

    async def get_by_path(self, file_path: str) -> FileRecord | None:
        cursor = self._conn.execute(
            "SELECT id, file_name, file_path, suggested_name, status FROM files "
            "WHERE file_path = ?",
            (file_path,),
        )
        row = cursor.fetchone()
        return self._row_to_record(row) if row else None

    def upsert(self, record: FileRecord) -> None:
        self._staged[record.file_path] = record

    async def commit(self) -> int:
        if not self._staged:
            return 0
        staged = list(self._staged.values())
        try:
            with self._conn:
                for record in staged:
                    self._conn.execute(
                        _UPSERT,
                        (record.file_name, record.file_path, record.suggested_name, record.status),
                    )
        except sqlite3.Error as e:
            raise RecordStoreError(f"Failed to commit {len(staged)} record(s): {e}") from e

        for record in staged:
            if record.id is None:
                row = self._conn.execute(
                    "SELECT id FROM files WHERE file_path = ?", (record.file_path,)
                ).fetchone()
                record.id = row[0]
        self._staged.clear()
        logger.debug("Committed %d record(s) to %s", len(staged), self._db_path)
        return len(staged)

    @property
    def pending_count(self) -> int:
        return len(self._staged)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    @staticmethod
    def _row_to_record(row: tuple) -> FileRecord:
        return FileRecord(
            id=row[0], file_name=row[1], file_path=row[2],
            suggested_name=row[3], status=row[4],
        )
