"""Mood statistics models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from journal_core.analytics import StatisticsSummary, TimePeriod
from journal_core.models import MoodType


class MoodTrendPointModel(BaseModel):
    date: datetime
    score: float = Field(ge=1.0, le=5.0)


class MoodShareModel(BaseModel):
    mood: MoodType
    emoji: str
    count: int
    fraction: float = Field(ge=0.0, le=1.0)


class KeywordCountModel(BaseModel):
    word: str
    count: int


class StatisticsResponse(BaseModel):
    """Aggregated mood statistics for one period."""

    model_config = ConfigDict(populate_by_name=True)

    period: TimePeriod
    total_entries: int = Field(serialization_alias="totalEntries")
    analyzed_entries: int = Field(serialization_alias="analyzedEntries")
    trend: list[MoodTrendPointModel]
    distribution: list[MoodShareModel]
    top_keywords: list[KeywordCountModel] = Field(serialization_alias="topKeywords")
    average_energy: float = Field(serialization_alias="averageEnergy")
    average_sentiment: float = Field(serialization_alias="averageSentiment")
    best_day: Optional[str] = Field(default=None, serialization_alias="bestDay")
    current_streak: int = Field(serialization_alias="currentStreak")
    unique_days: int = Field(serialization_alias="uniqueDays")

    @classmethod
    def from_summary(cls, period: TimePeriod, summary: StatisticsSummary) -> "StatisticsResponse":
        return cls(period=period, **summary.to_dict())
