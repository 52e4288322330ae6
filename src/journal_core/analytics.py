"""
Mood Analytics Module.

Pure, read-only aggregation over a list of journal entries: trend scores,
mood distribution, keyword frequency, averages, best weekday and streaks.
Callers pass an already-windowed snapshot (see ``filter_by_period``).
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .models import JournalEntry, MoodType, analyzed_only

logger = logging.getLogger(__name__)

MOOD_SCORES: Dict[MoodType, float] = {
    MoodType.SAD: 1.0,
    MoodType.ANXIOUS: 1.5,
    MoodType.NEUTRAL: 2.0,
    MoodType.CALM: 2.5,
    MoodType.PEACEFUL: 3.0,
    MoodType.ENERGETIC: 3.5,
    MoodType.HAPPY: 4.0,
    MoodType.EXCITED: 5.0,
}

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class TimePeriod(str, Enum):
    """Statistics window relative to now."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass
class MoodTrendPoint:
    """A single point on the mood trend chart."""

    date: datetime
    score: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "score": self.score}


@dataclass
class MoodShare:
    """How often a mood occurs among analyzed entries."""

    mood: MoodType
    count: int
    fraction: float

    def to_dict(self) -> dict:
        return {
            "mood": self.mood.value,
            "emoji": self.mood.emoji,
            "count": self.count,
            "fraction": self.fraction,
        }


@dataclass
class KeywordCount:
    """Occurrences of one keyword."""

    word: str
    count: int

    def to_dict(self) -> dict:
        return {"word": self.word, "count": self.count}


@dataclass
class StatisticsSummary:
    """All statistics for one entry window."""

    total_entries: int
    analyzed_entries: int
    trend: List[MoodTrendPoint] = field(default_factory=list)
    distribution: List[MoodShare] = field(default_factory=list)
    top_keywords: List[KeywordCount] = field(default_factory=list)
    average_energy: float = 0.0
    average_sentiment: float = 0.0
    best_day: Optional[str] = None
    current_streak: int = 0
    unique_days: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "total_entries": self.total_entries,
            "analyzed_entries": self.analyzed_entries,
            "trend": [p.to_dict() for p in self.trend],
            "distribution": [s.to_dict() for s in self.distribution],
            "top_keywords": [k.to_dict() for k in self.top_keywords],
            "average_energy": self.average_energy,
            "average_sentiment": self.average_sentiment,
            "best_day": self.best_day,
            "current_streak": self.current_streak,
            "unique_days": self.unique_days,
        }


def mood_score(mood: MoodType) -> float:
    """Fixed 1.0-5.0 ordinal used for trend charting."""
    return MOOD_SCORES[mood]


def _subtract_months(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    # Clamp to the last valid day, e.g. Mar 31 -> Feb 28
    next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last_day = (next_first - timedelta(days=1)).day
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def period_start(period: TimePeriod, now: datetime) -> datetime:
    """Earliest timestamp inside the window ending at ``now``."""
    period = TimePeriod(period)
    if period is TimePeriod.WEEK:
        return now - timedelta(days=7)
    if period is TimePeriod.MONTH:
        return _subtract_months(now, 1)
    return _subtract_months(now, 12)


def filter_by_period(
    entries: Iterable[JournalEntry], period: TimePeriod, now: datetime
) -> List[JournalEntry]:
    """Entries dated at or after the start of the period, order preserved."""
    cutoff = period_start(period, now)
    return [e for e in entries if e.date >= cutoff]


def mood_trend(entries: Iterable[JournalEntry]) -> List[MoodTrendPoint]:
    """Mood score per analyzed entry, oldest first."""
    points = [
        MoodTrendPoint(date=entry.date, score=mood_score(analysis.mood))
        for entry, analysis in analyzed_only(entries)
    ]
    points.sort(key=lambda p: p.date)
    return points


def mood_distribution(entries: Iterable[JournalEntry]) -> List[MoodShare]:
    """Share of each mood among analyzed entries, most frequent first."""
    counts: Dict[MoodType, int] = {}
    for _, analysis in analyzed_only(entries):
        counts[analysis.mood] = counts.get(analysis.mood, 0) + 1

    total = sum(counts.values())
    if total == 0:
        return []

    # sorted() is stable, so ties keep first-encountered order
    return sorted(
        (MoodShare(mood=m, count=c, fraction=c / total) for m, c in counts.items()),
        key=lambda share: share.count,
        reverse=True,
    )


def top_keywords(entries: Iterable[JournalEntry], limit: int = 10) -> List[KeywordCount]:
    """Most frequent keywords; ties keep first-seen order."""
    counts: Dict[str, int] = {}
    for _, analysis in analyzed_only(entries):
        for keyword in analysis.keywords:
            counts[keyword] = counts.get(keyword, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [KeywordCount(word=w, count=c) for w, c in ranked[: max(limit, 0)]]


def average_energy(entries: Iterable[JournalEntry]) -> float:
    values = [analysis.energy for _, analysis in analyzed_only(entries)]
    return sum(values) / len(values) if values else 0.0


def average_sentiment(entries: Iterable[JournalEntry]) -> float:
    values = [analysis.sentiment for _, analysis in analyzed_only(entries)]
    return sum(values) / len(values) if values else 0.0


def best_day(entries: Iterable[JournalEntry], tz: tzinfo = timezone.utc) -> Optional[str]:
    """
    Weekday name of the highest-scoring analyzed entry.

    Ties go to the first entry in the order supplied. That order is the
    caller's and is not re-sorted here, so the same set of entries can give
    a different answer when passed in a different order.
    """
    best_entry = None
    best_score = None
    for entry, analysis in analyzed_only(entries):
        score = mood_score(analysis.mood)
        if best_score is None or score > best_score:
            best_entry, best_score = entry, score
    if best_entry is None:
        return None
    return WEEKDAY_NAMES[best_entry.day(tz).weekday()]


def _distinct_days(entries: Iterable[JournalEntry], tz: tzinfo) -> List[date]:
    return sorted({entry.day(tz) for entry in entries}, reverse=True)


def current_streak(
    entries: Iterable[JournalEntry],
    today: date,
    tz: tzinfo = timezone.utc,
) -> int:
    """
    Consecutive days with an entry, counting back from ``today``.

    A day extends the streak when it is the cursor day or the day before
    it; the first gap ends the walk.
    """
    if isinstance(today, datetime):
        today = today.astimezone(tz).date()

    streak = 0
    cursor = today
    for day in _distinct_days(entries, tz):
        if day == cursor or day == cursor - timedelta(days=1):
            streak += 1
            cursor = day
        else:
            break
    return streak


def unique_days_count(entries: Iterable[JournalEntry], tz: tzinfo = timezone.utc) -> int:
    return len({entry.day(tz) for entry in entries})


def summarize(
    entries: Sequence[JournalEntry],
    today: date,
    tz: tzinfo = timezone.utc,
    keyword_limit: int = 10,
) -> StatisticsSummary:
    """Compute every statistic for one window of entries."""
    entries = list(entries)
    summary = StatisticsSummary(
        total_entries=len(entries),
        analyzed_entries=sum(1 for e in entries if e.is_analyzed),
        trend=mood_trend(entries),
        distribution=mood_distribution(entries),
        top_keywords=top_keywords(entries, limit=keyword_limit),
        average_energy=average_energy(entries),
        average_sentiment=average_sentiment(entries),
        best_day=best_day(entries, tz),
        current_streak=current_streak(entries, today, tz),
        unique_days=unique_days_count(entries, tz),
    )
    logger.debug(
        f"[ANALYTICS] Summarized {summary.total_entries} entries "
        f"({summary.analyzed_entries} analyzed), streak={summary.current_streak}"
    )
    return summary
