"""
Mood Journal Core.

One mood-annotated journal entry per day, statistics over the entry history,
and activity suggestions for a single mood analysis.
"""

from .errors import JournalError, StorageError, ClassificationError, ValidationError
from .models import MoodType, MoodAnalysis, JournalEntry, Analyzed, Unanalyzed
from .repository import EntryRepository, SQLiteEntryRepository
from .store import JournalStore, StoreConfig
from .suggestions import Suggestion, SuggestionCategory, SuggestionEngine
from .classifier import MoodClassifier

__all__ = [
    "JournalError",
    "StorageError",
    "ClassificationError",
    "ValidationError",
    "MoodType",
    "MoodAnalysis",
    "JournalEntry",
    "Analyzed",
    "Unanalyzed",
    "EntryRepository",
    "SQLiteEntryRepository",
    "JournalStore",
    "StoreConfig",
    "Suggestion",
    "SuggestionCategory",
    "SuggestionEngine",
    "MoodClassifier",
]
