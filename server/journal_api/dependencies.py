"""Component wiring for request handlers.

Each component is built once from the settings and handed to routes through
FastAPI dependencies, so tests can override any of them.
"""
import logging
import random
from functools import lru_cache

from journal_core.classifier import MoodClassifier
from journal_core.repository import SQLiteEntryRepository
from journal_core.store import JournalStore, StoreConfig
from journal_core.suggestions import SuggestionEngine

from .config import get_settings

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_store() -> JournalStore:
    """Provide the journal store backed by the configured SQLite file."""
    settings = get_settings()
    log.info(f"[API] Opening journal database at {settings.journal_db_path}")
    repository = SQLiteEntryRepository(settings.journal_db_path)
    return JournalStore(repository, StoreConfig(timezone=settings.timezone))


@lru_cache(maxsize=1)
def get_suggestion_engine() -> SuggestionEngine:
    settings = get_settings()
    rng = random.Random(settings.suggestion_seed) if settings.suggestion_seed is not None else None
    return SuggestionEngine(rng=rng)


@lru_cache(maxsize=1)
def get_classifier() -> MoodClassifier:
    settings = get_settings()
    return MoodClassifier(
        api_key=settings.gemini_api_key,
        endpoint=settings.gemini_endpoint,
        timeout=settings.classifier_timeout,
    )
