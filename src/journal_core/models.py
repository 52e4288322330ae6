"""
Journal Data Model.

Value types for mood analyses and journal entries. These carry validation
only; all behaviour lives in the store, analytics and suggestion modules.
"""

import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from .errors import ValidationError


class MoodType(str, Enum):
    """Mood categories produced by the classifier."""

    HAPPY = "happy"
    CALM = "calm"
    SAD = "sad"
    ANXIOUS = "anxious"
    ENERGETIC = "energetic"
    PEACEFUL = "peaceful"
    EXCITED = "excited"
    NEUTRAL = "neutral"

    @property
    def emoji(self) -> str:
        return _MOOD_EMOJI[self]

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "MoodType":
        """Map a classifier tag to a mood, falling back to neutral."""
        if not tag:
            return cls.NEUTRAL
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return cls.NEUTRAL


_MOOD_EMOJI = {
    MoodType.HAPPY: "😊",
    MoodType.CALM: "😌",
    MoodType.SAD: "😢",
    MoodType.ANXIOUS: "😰",
    MoodType.ENERGETIC: "⚡️",
    MoodType.PEACEFUL: "🕊️",
    MoodType.EXCITED: "🤩",
    MoodType.NEUTRAL: "😐",
}


def _check_range(name: str, value: float, low: float, high: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a number, got {value!r}") from e
    if math.isnan(value) or not low <= value <= high:
        raise ValidationError(f"{name}={value} outside [{low}, {high}]")
    return value


@dataclass(frozen=True)
class MoodAnalysis:
    """Result of analysing one journal text."""

    mood: MoodType
    energy: float  # 0.0 - 1.0
    sentiment: float  # -1.0 (negative) - 1.0 (positive)
    keywords: Tuple[str, ...] = ()
    summary: str = ""

    def __post_init__(self):
        if not isinstance(self.mood, MoodType):
            try:
                object.__setattr__(self, "mood", MoodType(self.mood))
            except ValueError as e:
                raise ValidationError(f"Unknown mood {self.mood!r}") from e
        object.__setattr__(self, "energy", _check_range("energy", self.energy, 0.0, 1.0))
        object.__setattr__(
            self, "sentiment", _check_range("sentiment", self.sentiment, -1.0, 1.0)
        )
        object.__setattr__(self, "keywords", tuple(self.keywords))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mood": self.mood.value,
            "emoji": self.mood.emoji,
            "energy": self.energy,
            "sentiment": self.sentiment,
            "keywords": list(self.keywords),
            "summary": self.summary,
        }


class _UnanalyzedType:
    """Marker for an entry that has not been through the classifier."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Unanalyzed"

    def __reduce__(self):
        return (_UnanalyzedType, ())


Unanalyzed = _UnanalyzedType()


@dataclass(frozen=True)
class Analyzed:
    """Entry variant carrying a mood analysis."""

    analysis: MoodAnalysis


AnalysisState = Union[_UnanalyzedType, Analyzed]


def as_analysis_state(value: Union[None, MoodAnalysis, AnalysisState]) -> AnalysisState:
    """Normalize an optional analysis into the tagged variant."""
    if value is None or value is Unanalyzed:
        return Unanalyzed
    if isinstance(value, Analyzed):
        return value
    if isinstance(value, MoodAnalysis):
        return Analyzed(value)
    raise TypeError(f"Expected MoodAnalysis or analysis state, got {type(value).__name__}")


@dataclass(frozen=True)
class JournalEntry:
    """One day's journal entry."""

    date: datetime
    text: str = ""
    analysis: AnalysisState = Unanalyzed
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if self.date.tzinfo is None:
            raise ValidationError("JournalEntry.date must be timezone-aware")
        object.__setattr__(self, "analysis", as_analysis_state(self.analysis))

    @property
    def is_analyzed(self) -> bool:
        return isinstance(self.analysis, Analyzed)

    @property
    def mood_analysis(self) -> Optional[MoodAnalysis]:
        """The analysis if present, else None."""
        if isinstance(self.analysis, Analyzed):
            return self.analysis.analysis
        return None

    def day(self, tz=timezone.utc):
        """Calendar day of this entry in the given zone."""
        return self.date.astimezone(tz).date()

    def with_content(
        self, text: str, analysis: Union[None, MoodAnalysis, AnalysisState] = None
    ) -> "JournalEntry":
        """Return a copy with new text/analysis; id and date are kept."""
        return replace(self, text=text, analysis=as_analysis_state(analysis))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        analysis = self.mood_analysis
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "text": self.text,
            "analysis": analysis.to_dict() if analysis else None,
        }


def analyzed_only(entries: Iterable[JournalEntry]):
    """Yield (entry, analysis) for analyzed entries, preserving order."""
    for entry in entries:
        analysis = entry.mood_analysis
        if analysis is not None:
            yield entry, analysis
