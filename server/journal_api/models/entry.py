"""Journal entry data models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from journal_core.models import JournalEntry, MoodType

from .suggestion import SuggestionModel


class MoodAnalysisModel(BaseModel):
    """Mood analysis attached to an entry."""

    mood: MoodType
    emoji: str
    energy: float = Field(ge=0.0, le=1.0)
    sentiment: float = Field(ge=-1.0, le=1.0)
    keywords: list[str] = []
    summary: str = ""


class JournalEntryModel(BaseModel):
    """A stored journal entry."""

    id: str
    date: datetime
    text: str
    analyzed: bool
    analysis: Optional[MoodAnalysisModel] = None

    @classmethod
    def from_domain(cls, entry: JournalEntry) -> "JournalEntryModel":
        return cls(**entry.to_dict(), analyzed=entry.is_analyzed)


class EntryCreate(BaseModel):
    """Text submitted for today's entry."""

    text: str = Field(min_length=1)


class TodayEntryResponse(BaseModel):
    """Today's entry together with suggestions for its mood."""

    entry: JournalEntryModel
    suggestions: list[SuggestionModel]
