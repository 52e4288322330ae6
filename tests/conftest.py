"""
Pytest fixtures for Mood Journal tests.
"""
import sys
import pytest
from pathlib import Path
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

# Ensure the project root and src/ are on sys.path so tests can import
# journal_core and server.journal_api without an install.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from journal_core.errors import StorageError  # noqa: E402
from journal_core.models import JournalEntry, MoodAnalysis, MoodType  # noqa: E402
from journal_core.repository import SQLiteEntryRepository  # noqa: E402
from journal_core.store import JournalStore, StoreConfig  # noqa: E402

# Load environment variables
load_dotenv()


# Saturday 15 November 2025, midday UTC
NOW = datetime(2025, 11, 15, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Test Doubles
# ============================================================================

class FrozenClock:
    """Controllable clock for the journal store."""

    def __init__(self, now: datetime = NOW):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FlakyRepository:
    """
    Repository wrapper that raises StorageError on demand.

    Add operation names ("insert", "update", "delete", "query_by_date_range",
    "query_all") to ``failing``, or entry ids to ``failing_delete_ids``.
    """

    def __init__(self, inner):
        self.inner = inner
        self.failing = set()
        self.failing_delete_ids = set()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StorageError(f"simulated {operation} failure")

    def insert(self, entry):
        self._check("insert")
        self.inner.insert(entry)

    def update(self, entry):
        self._check("update")
        self.inner.update(entry)

    def delete(self, entry_id):
        self._check("delete")
        if entry_id in self.failing_delete_ids:
            raise StorageError(f"simulated delete failure for {entry_id}")
        return self.inner.delete(entry_id)

    def query_by_date_range(self, start, end):
        self._check("query_by_date_range")
        return self.inner.query_by_date_range(start, end)

    def query_all(self, sort_by_date_desc=True):
        self._check("query_all")
        return self.inner.query_all(sort_by_date_desc=sort_by_date_desc)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def clock():
    """Clock frozen at NOW."""
    return FrozenClock()


@pytest.fixture
def repository(tmp_path):
    """SQLite repository in a temporary directory."""
    return SQLiteEntryRepository(tmp_path / "journal.db")


@pytest.fixture
def flaky_repository(repository):
    return FlakyRepository(repository)


@pytest.fixture
def store(repository, clock):
    """Journal store over the temporary repository, UTC calendar days."""
    return JournalStore(repository, StoreConfig(timezone="UTC"), clock=clock)


@pytest.fixture
def flaky_store(flaky_repository, clock):
    return JournalStore(flaky_repository, StoreConfig(timezone="UTC"), clock=clock)


def make_analysis(
    mood: MoodType = MoodType.NEUTRAL,
    energy: float = 0.5,
    sentiment: float = 0.0,
    keywords=(),
    summary: str = "",
) -> MoodAnalysis:
    return MoodAnalysis(
        mood=mood, energy=energy, sentiment=sentiment, keywords=tuple(keywords), summary=summary
    )


def make_entry(
    when: datetime,
    mood: MoodType = None,
    energy: float = 0.5,
    sentiment: float = 0.0,
    keywords=(),
    text: str = "entry",
) -> JournalEntry:
    """Entry at ``when``; analyzed only if a mood is given."""
    analysis = None
    if mood is not None:
        analysis = make_analysis(mood, energy, sentiment, keywords)
    return JournalEntry(date=when, text=text, analysis=analysis)


@pytest.fixture
def entry_factory():
    """Return the make_entry helper."""
    return make_entry


@pytest.fixture
def analysis_factory():
    """Return the make_analysis helper."""
    return make_analysis
