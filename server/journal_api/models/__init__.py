"""Pydantic models for journal API requests and responses."""
from .entry import MoodAnalysisModel, JournalEntryModel, EntryCreate, TodayEntryResponse
from .statistics import StatisticsResponse
from .suggestion import SuggestionModel, SuggestionRequest

__all__ = [
    "MoodAnalysisModel",
    "JournalEntryModel",
    "EntryCreate",
    "TodayEntryResponse",
    "StatisticsResponse",
    "SuggestionModel",
    "SuggestionRequest",
]
