#!/usr/bin/env python3
"""
Seed a mood journal SQLite database with demo entries.

Writes a few weeks of analyzed entries ending today, plus one deliberate
duplicate day so reconciliation has something to clean up.

Usage:
    python scripts/seed_journal.py --days 21 --reconcile
"""
import argparse
import os
import random
import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))
sys.path.insert(0, str(BASE_DIR / "src"))

from journal_core.models import JournalEntry, MoodAnalysis, MoodType  # noqa: E402
from journal_core.repository import SQLiteEntryRepository  # noqa: E402
from journal_core.store import JournalStore, StoreConfig  # noqa: E402
from server.journal_api.config import get_settings  # noqa: E402

DEMO_TEXTS = {
    MoodType.HAPPY: ("Finished the project and had dinner with friends.", ["project", "friends", "dinner"]),
    MoodType.CALM: ("Quiet day, read on the balcony.", ["reading", "quiet"]),
    MoodType.SAD: ("Tired, and the plans fell through.", ["tired", "plans"]),
    MoodType.ANXIOUS: ("Big meeting tomorrow and too much on my plate.", ["work", "meeting", "stress"]),
    MoodType.ENERGETIC: ("Morning run, then cleared the whole inbox.", ["run", "work"]),
    MoodType.PEACEFUL: ("Long walk by the lake.", ["walk", "nature"]),
    MoodType.EXCITED: ("Got the offer!", ["offer", "work", "friends"]),
    MoodType.NEUTRAL: ("Ordinary day.", ["routine"]),
}


def demo_entry(day: date, store: JournalStore, rng: random.Random) -> JournalEntry:
    """Build one analyzed entry at a daytime hour of ``day`` in the store's zone."""
    mood = rng.choice(list(MoodType))
    text, keywords = DEMO_TEXTS[mood]
    local_time = time(rng.randint(8, 21), rng.randint(0, 59))
    return JournalEntry(
        date=datetime.combine(day, local_time, tzinfo=store.tz),
        text=text,
        analysis=MoodAnalysis(
            mood=mood,
            energy=round(rng.uniform(0.1, 0.95), 2),
            sentiment=round(rng.uniform(-0.8, 0.9), 2),
            keywords=tuple(keywords),
            summary=f"The writer feels {mood.value}.",
        ),
    )


def seed(
    db_path: Path,
    days: int,
    seed_value: int,
    timezone_name: str = "UTC",
    today: Optional[date] = None,
) -> int:
    """
    Insert demo entries for the last ``days`` calendar days.

    Days are counted in ``timezone_name``, the same zone the API buckets
    entries by, so the duplicate day stays a duplicate for reconciliation.

    Returns:
        Number of entries inserted
    """
    rng = random.Random(seed_value)
    repository = SQLiteEntryRepository(db_path)
    store = JournalStore(repository, StoreConfig(timezone=timezone_name))
    if today is None:
        today = store.day_of(store.now())

    inserted = 0
    for offset in range(days):
        # Leave an occasional gap so the streak is not the whole history
        if offset > 3 and rng.random() < 0.15:
            continue
        repository.insert(demo_entry(today - timedelta(days=offset), store, rng))
        inserted += 1

    # Duplicate day, only reachable through migrations in real use
    repository.insert(demo_entry(today - timedelta(days=1), store, rng))
    inserted += 1
    return inserted


def main():
    load_dotenv()
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Seed a mood journal database with demo data")
    parser.add_argument("--db", default=settings.journal_db_path, help="SQLite database path")
    parser.add_argument(
        "--timezone",
        default=settings.timezone,
        help="Zone that defines calendar days (defaults to MOOD_JOURNAL_TIMEZONE)",
    )
    parser.add_argument("--days", type=int, default=21, help="Days of history to create")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--reset", action="store_true", help="Delete the database first")
    parser.add_argument("--reconcile", action="store_true", help="Reconcile duplicates afterwards")
    args = parser.parse_args()

    db_path = Path(args.db)

    print("=" * 60)
    print("Mood Journal Seed Script")
    print("=" * 60)

    if args.reset and db_path.exists():
        os.remove(db_path)
        print(f"  Removed existing: {db_path.name}")

    count = seed(db_path, args.days, args.seed, timezone_name=args.timezone)
    print(f"  Entries inserted: {count} (timezone {args.timezone})")

    if args.reconcile:
        store = JournalStore(SQLiteEntryRepository(db_path), StoreConfig(timezone=args.timezone))
        removed = store.reconcile_duplicates()
        print(f"  Duplicates removed: {removed}")

    size_kb = db_path.stat().st_size / 1024
    print(f"\nDatabase: {db_path} ({size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
