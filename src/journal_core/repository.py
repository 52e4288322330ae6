"""
Journal Entry Repository.

Minimal persistence interface consumed by the JournalStore, plus the SQLite
implementation used by the API and scripts. Every mutation runs in its own
transaction so a failure never leaves a half-written record behind.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, List, Optional, Protocol, Union

from .errors import StorageError, ValidationError
from .models import Analyzed, JournalEntry, MoodAnalysis, Unanalyzed

logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Durable keyed storage for journal entries."""

    def insert(self, entry: JournalEntry) -> None:
        ...

    def update(self, entry: JournalEntry) -> None:
        ...

    def delete(self, entry_id: str) -> bool:
        ...

    def query_by_date_range(
        self, start: datetime, end: Optional[datetime]
    ) -> List[JournalEntry]:
        """Entries with start <= date < end, ascending; no upper bound if end is None."""
        ...

    def query_all(self, sort_by_date_desc: bool = True) -> List[JournalEntry]:
        ...


def _to_db_timestamp(value: datetime) -> str:
    # Fixed-width UTC text so lexical order matches chronological order
    try:
        value = value.astimezone(timezone.utc)
    except OverflowError:
        # Local midnight on the first or last representable day
        value = datetime.min if value.year == 1 else datetime.max
    return f"{value.year:04d}-" + value.strftime("%m-%dT%H:%M:%S.%f") + "+00:00"


class SQLiteEntryRepository:
    """
    SQLite-backed entry repository.

    Opens a short-lived connection per operation. Dates are stored as UTC
    ISO-8601 text; the analysis columns are NULL for unanalyzed entries.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open journal database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _initialize(self) -> None:
        try:
            with self._connect() as conn, conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS journal_entries (
                        seq INTEGER PRIMARY KEY AUTOINCREMENT,
                        id TEXT NOT NULL UNIQUE,
                        date TEXT NOT NULL,
                        text TEXT NOT NULL,
                        mood TEXT,
                        energy REAL,
                        sentiment REAL,
                        keywords TEXT,
                        summary TEXT
                    )
                    """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_journal_date ON journal_entries(date)"
                )
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize journal schema: {e}") from e

    @staticmethod
    def _analysis_columns(entry: JournalEntry) -> tuple:
        analysis = entry.mood_analysis
        if analysis is None:
            return (None, None, None, None, None)
        try:
            keywords = json.dumps(list(analysis.keywords), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize keywords for entry {entry.id}: {e}") from e
        return (
            analysis.mood.value,
            analysis.energy,
            analysis.sentiment,
            keywords,
            analysis.summary,
        )

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        """Convert SQLite row to JournalEntry."""
        try:
            state = Unanalyzed
            if row["mood"] is not None:
                state = Analyzed(
                    MoodAnalysis(
                        mood=row["mood"],
                        energy=row["energy"],
                        sentiment=row["sentiment"],
                        keywords=json.loads(row["keywords"] or "[]"),
                        summary=row["summary"] or "",
                    )
                )
            return JournalEntry(
                id=row["id"],
                date=datetime.fromisoformat(row["date"]),
                text=row["text"],
                analysis=state,
            )
        except (ValueError, TypeError, ValidationError) as e:
            raise StorageError(f"Corrupt journal row {row['id']!r}: {e}") from e

    def insert(self, entry: JournalEntry) -> None:
        values = (entry.id, _to_db_timestamp(entry.date), entry.text) + self._analysis_columns(entry)
        try:
            with self._connect() as conn, conn:
                conn.execute(
                    """
                    INSERT INTO journal_entries
                        (id, date, text, mood, energy, sentiment, keywords, summary)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    values,
                )
        except sqlite3.Error as e:
            raise StorageError(f"Insert failed for entry {entry.id}: {e}") from e
        logger.debug(f"[SQLITE] Inserted entry {entry.id}")

    def update(self, entry: JournalEntry) -> None:
        values = (entry.text,) + self._analysis_columns(entry) + (entry.id,)
        try:
            with self._connect() as conn, conn:
                cursor = conn.execute(
                    """
                    UPDATE journal_entries
                    SET text = ?, mood = ?, energy = ?, sentiment = ?, keywords = ?, summary = ?
                    WHERE id = ?
                    """,
                    values,
                )
                updated = cursor.rowcount
        except sqlite3.Error as e:
            raise StorageError(f"Update failed for entry {entry.id}: {e}") from e
        if updated == 0:
            raise StorageError(f"Entry {entry.id} not found")
        logger.debug(f"[SQLITE] Updated entry {entry.id}")

    def delete(self, entry_id: str) -> bool:
        try:
            with self._connect() as conn, conn:
                cursor = conn.execute("DELETE FROM journal_entries WHERE id = ?", (entry_id,))
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StorageError(f"Delete failed for entry {entry_id}: {e}") from e

    def query_by_date_range(
        self, start: datetime, end: Optional[datetime]
    ) -> List[JournalEntry]:
        sql = "SELECT * FROM journal_entries WHERE date >= ?"
        params = [_to_db_timestamp(start)]
        if end is not None:
            sql += " AND date < ?"
            params.append(_to_db_timestamp(end))
        sql += " ORDER BY date ASC, seq ASC"
        try:
            with self._connect() as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Range query failed: {e}") from e
        return [self._row_to_entry(row) for row in rows]

    def query_all(self, sort_by_date_desc: bool = True) -> List[JournalEntry]:
        order = "date DESC, seq ASC" if sort_by_date_desc else "date ASC, seq ASC"
        try:
            with self._connect() as conn:
                rows = conn.execute(f"SELECT * FROM journal_entries ORDER BY {order}").fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Query failed: {e}") from e
        return [self._row_to_entry(row) for row in rows]
