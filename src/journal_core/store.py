"""
Journal Store.

Single source of truth for journal entries. Enforces one entry per calendar
day on top of an injected EntryRepository, resolves update-vs-create for
today's entry, and reconciles duplicate days left behind by backend
anomalies or migrations.
"""

import calendar
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Dict, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from .errors import StorageError
from .models import AnalysisState, JournalEntry, MoodAnalysis, as_analysis_state
from .repository import EntryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Explicit store configuration."""

    timezone: str = "UTC"

    @property
    def tzinfo(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JournalStore:
    """
    Keyed journal persistence with a one-entry-per-day invariant.

    Mutating operations (upsert, delete, reconcile) are serialized behind a
    single writer lock per instance. Reads take no lock and degrade to an
    empty result on backend failure; the failure is logged, kept in
    ``last_read_error`` and passed to ``on_read_error`` if one is set.
    """

    def __init__(
        self,
        repository: EntryRepository,
        config: Optional[StoreConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
        on_read_error: Optional[Callable[[StorageError], None]] = None,
    ):
        self.repository = repository
        self.config = config or StoreConfig()
        self.tz = self.config.tzinfo
        self._clock = clock or _utc_now
        self._write_lock = threading.Lock()
        self.on_read_error = on_read_error

        self.last_read_error: Optional[StorageError] = None
        self.read_error_count = 0
        self.last_reconcile_errors: List[Tuple[date, StorageError]] = []

        logger.info(f"[STORE] Initialized journal store (timezone={self.config.timezone})")

    # ------------------------------------------------------------------
    # Calendar helpers
    # ------------------------------------------------------------------

    def now(self) -> datetime:
        current = self._clock()
        if current.tzinfo is None:
            raise ValueError("Store clock must return timezone-aware datetimes")
        return current

    def day_of(self, value: Union[date, datetime]) -> date:
        """Calendar day of a timestamp in the store's zone."""
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=self.tz)
            return value.astimezone(self.tz).date()
        return value

    def _start_of_day(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def _next_day_start(self, day: date) -> Optional[datetime]:
        """Start of the day after ``day``; None after the last representable day."""
        if day == date.max:
            return None
        return self._start_of_day(day + timedelta(days=1))

    def _day_bounds(self, day: date) -> Tuple[datetime, Optional[datetime]]:
        return self._start_of_day(day), self._next_day_start(day)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _read_failed(self, operation: str, error: StorageError) -> None:
        self.last_read_error = error
        self.read_error_count += 1
        logger.error(f"[STORE] {operation} failed, returning empty result: {error}")
        if self.on_read_error is not None:
            self.on_read_error(error)

    def fetch_all(self) -> List[JournalEntry]:
        """All entries, newest first."""
        try:
            return self.repository.query_all(sort_by_date_desc=True)
        except StorageError as e:
            self._read_failed("fetch_all", e)
            return []

    def fetch_for_day(self, day: Union[date, datetime]) -> Optional[JournalEntry]:
        """
        Entry on the same calendar day as ``day``, or None.

        If duplicates exist for the day the latest-dated one is returned,
        matching the record reconciliation would keep.
        """
        start, end = self._day_bounds(self.day_of(day))
        try:
            entries = self.repository.query_by_date_range(start, end)
        except StorageError as e:
            self._read_failed("fetch_for_day", e)
            return None
        return _latest(entries)

    def fetch_for_month(self, year: int, month: int) -> List[JournalEntry]:
        """Entries from the first through the last day of a month, oldest first."""
        first = date(year, month, 1)
        last = first.replace(day=calendar.monthrange(year, month)[1])
        try:
            return self.repository.query_by_date_range(
                self._start_of_day(first), self._next_day_start(last)
            )
        except StorageError as e:
            self._read_failed("fetch_for_month", e)
            return []

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_for_today(
        self,
        text: str,
        analysis: Union[None, MoodAnalysis, AnalysisState] = None,
    ) -> JournalEntry:
        """
        Create today's entry or overwrite its text and analysis.

        Args:
            text: Journal text
            analysis: Classifier result, if the text has been analysed

        Returns:
            The stored entry (same id/date as before when updating)

        Raises:
            StorageError: if the backend write fails; nothing is changed
        """
        state = as_analysis_state(analysis)
        with self._write_lock:
            now = self.now()
            start, end = self._day_bounds(self.day_of(now))
            existing = _latest(self.repository.query_by_date_range(start, end))

            if existing is not None:
                updated = existing.with_content(text, state)
                self.repository.update(updated)
                logger.info(f"[STORE] Updated entry {updated.id} for {self.day_of(now)}")
                return updated

            created = JournalEntry(date=now, text=text, analysis=state)
            self.repository.insert(created)
            logger.info(f"[STORE] Created entry {created.id} for {self.day_of(now)}")
            return created

    def delete(self, entry_id: str) -> None:
        """Remove an entry by id; unknown ids are ignored."""
        with self._write_lock:
            removed = self.repository.delete(entry_id)
        if removed:
            logger.info(f"[STORE] Deleted entry {entry_id}")
        else:
            logger.debug(f"[STORE] Delete ignored, no entry {entry_id}")

    def reconcile_duplicates(self) -> int:
        """
        Keep only the latest entry for every calendar day.

        Each day is handled independently; a failure on one day is logged and
        recorded in ``last_reconcile_errors`` without stopping the pass. When
        timestamps are identical the earliest-inserted record is kept.

        Returns:
            Number of entries removed

        Raises:
            StorageError: if the entry list itself cannot be read
        """
        with self._write_lock:
            self.last_reconcile_errors = []
            entries = self.repository.query_all(sort_by_date_desc=True)

            buckets: Dict[date, List[JournalEntry]] = OrderedDict()
            for entry in entries:
                buckets.setdefault(self.day_of(entry.date), []).append(entry)

            removed = 0
            for day, day_entries in buckets.items():
                if len(day_entries) < 2:
                    continue
                day_entries.sort(key=lambda e: e.date, reverse=True)
                logger.info(
                    f"[RECONCILE] {day}: {len(day_entries)} entries, keeping {day_entries[0].id}"
                )
                try:
                    for duplicate in day_entries[1:]:
                        if self.repository.delete(duplicate.id):
                            removed += 1
                except StorageError as e:
                    logger.error(f"[RECONCILE] {day}: failed to remove duplicates: {e}")
                    self.last_reconcile_errors.append((day, e))

        if removed:
            logger.info(f"[RECONCILE] Removed {removed} duplicate entries")
        return removed


def _latest(entries: List[JournalEntry]) -> Optional[JournalEntry]:
    """Latest-dated entry; the earliest listed wins on equal timestamps."""
    best = None
    for entry in entries:
        if best is None or entry.date > best.date:
            best = entry
    return best
