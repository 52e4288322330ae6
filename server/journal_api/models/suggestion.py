"""Suggestion data models."""
from pydantic import BaseModel, Field

from journal_core.models import MoodType
from journal_core.suggestions import Suggestion, SuggestionCategory


class SuggestionModel(BaseModel):
    """One activity suggestion."""

    icon: str
    title: str
    description: str
    category: SuggestionCategory
    color: str

    @classmethod
    def from_domain(cls, suggestion: Suggestion) -> "SuggestionModel":
        return cls(**suggestion.to_dict())


class SuggestionRequest(BaseModel):
    """Mood values to build suggestions for."""

    mood: MoodType
    energy: float = Field(ge=0.0, le=1.0, description="Energy on the 0-1 analysis scale")
    sentiment: float = Field(ge=-1.0, le=1.0)
