"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from bitesnaps.domain.analysis import FailurePolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    analysis_failure_policy: FailurePolicy = FailurePolicy.FALLBACK
    analysis_timeout_seconds: float = 20.0
    image_max_width: int = 800
    image_quality: int = 60
    storage_backend: Literal["file", "memory", "supabase"] = "file"
    storage_path: str = ".bitesnaps/storage.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_store"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def has_analysis_credentials(settings: Settings) -> bool:
    """Return True when an inference credential is configured."""
    return bool(settings.openai_api_key and settings.openai_api_key.strip())
