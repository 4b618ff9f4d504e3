"""
Persistent SQLite store for saved résumés.

Each record keeps the content the user started from (form input or extracted
text) next to the rendered document they ended with, so a saved résumé can be
reopened for further editing.
"""

import json
import os
import sqlite3
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from vitae.utils.timestamp import now_exact

load_dotenv()
RECORDS_DB_PATH = Path(os.getenv("VITAE_RECORDS_DB", str(Path.home() / ".vitae" / "resumes.db"))).expanduser()


class RecordStoreError(Exception):
    """Raised when a résumé record cannot be read or written."""


@dataclass
class ResumeRecord:
    """
    A saved résumé.

    Attributes:
        id: Record identifier (uuid4 hex)
        title: User-facing title
        original_content: Content the résumé was generated from
        rendered_content: Résumé document as last edited (wire form)
        created_at: ISO 8601 creation time
        updated_at: ISO 8601 time of the last write
    """

    id: str
    title: str
    original_content: Any
    rendered_content: Dict[str, Any]
    created_at: str
    updated_at: str


class ResumeRecordStore:
    """
    SQLite-backed CRUD over résumé records.

    Writes are last-write-wins; there is no version check on update.
    """

    def __init__(self, db_path: Path = None):
        if db_path is None:
            db_path = RECORDS_DB_PATH
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self.conn = sqlite3.connect(str(self.db_path))
            self.conn.row_factory = sqlite3.Row
            self.conn.execute(
                """
                CREATE TABLE IF NOT EXISTS resumes (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    original_content TEXT,
                    rendered_content TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """
            )
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_updated_at ON resumes(updated_at)")
            self.conn.commit()
        except sqlite3.Error as e:
            raise RecordStoreError(f"Could not open record store at {self.db_path}: {e}") from e

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "ResumeRecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @staticmethod
    def _to_record(row: sqlite3.Row) -> ResumeRecord:
        original = row["original_content"]
        try:
            original_content = json.loads(original) if original is not None else None
            rendered_content = json.loads(row["rendered_content"])
        except (TypeError, ValueError) as e:
            raise RecordStoreError(f"Stored record {row['id']} is corrupt: {e}") from e
        return ResumeRecord(
            id=row["id"],
            title=row["title"],
            original_content=original_content,
            rendered_content=rendered_content,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            cursor = self.conn.execute(sql, params)
            self.conn.commit()
            return cursor
        except sqlite3.Error as e:
            self.conn.rollback()
            raise RecordStoreError(str(e)) from e

    def list_by_recency(self, limit: Optional[int] = None) -> List[ResumeRecord]:
        """All records, most recently updated first."""
        sql = "SELECT * FROM resumes ORDER BY updated_at DESC"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (limit,)
        return [self._to_record(row) for row in self._execute(sql, params).fetchall()]

    def get(self, record_id: str) -> Optional[ResumeRecord]:
        row = self._execute("SELECT * FROM resumes WHERE id = ?", (record_id,)).fetchone()
        return self._to_record(row) if row else None

    def insert(
        self, title: str, rendered_content: Dict[str, Any], original_content: Any = None
    ) -> ResumeRecord:
        """Create a new record and return it."""
        timestamp = now_exact()
        record = ResumeRecord(
            id=uuid.uuid4().hex,
            title=title,
            original_content=original_content,
            rendered_content=rendered_content,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._execute(
            "INSERT INTO resumes (id, title, original_content, rendered_content, created_at, updated_at)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (
                record.id,
                record.title,
                json.dumps(original_content) if original_content is not None else None,
                json.dumps(rendered_content),
                record.created_at,
                record.updated_at,
            ),
        )
        return record

    def update(
        self,
        record_id: str,
        title: Optional[str] = None,
        rendered_content: Optional[Dict[str, Any]] = None,
    ) -> ResumeRecord:
        """
        Overwrite title and/or rendered content of an existing record.

        Raises:
            RecordStoreError: If no record has this id
        """
        existing = self.get(record_id)
        if existing is None:
            raise RecordStoreError(f"Record not found: {record_id}")

        if title is not None:
            existing.title = title
        if rendered_content is not None:
            existing.rendered_content = rendered_content
        existing.updated_at = now_exact()

        self._execute(
            "UPDATE resumes SET title = ?, rendered_content = ?, updated_at = ? WHERE id = ?",
            (existing.title, json.dumps(existing.rendered_content), existing.updated_at, record_id),
        )
        return existing

    def delete(self, record_id: str) -> bool:
        """Delete a record. Returns False if it did not exist."""
        cursor = self._execute("DELETE FROM resumes WHERE id = ?", (record_id,))
        return cursor.rowcount > 0
