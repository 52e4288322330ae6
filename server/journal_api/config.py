"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from journal_core.classifier import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="MOOD_JOURNAL_")

    # Storage
    data_path: str = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    timezone: str = "UTC"

    @property
    def journal_db_path(self) -> str:
        return os.path.join(self.data_path, "mood_journal.db")

    # Mood classifier
    gemini_api_key: Optional[str] = None
    gemini_endpoint: str = DEFAULT_ENDPOINT
    classifier_timeout: float = DEFAULT_TIMEOUT

    # Seed for reproducible suggestion order (demos only)
    suggestion_seed: Optional[int] = None

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
