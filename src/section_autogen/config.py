"""Environment-level configuration for the generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AutogenSettings(BaseSettings):
    """Settings loaded from environment variables (or a local .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Runtime
    environment: str = "dev"
    project_id: str | None = None
    page_store_backend: Literal["memory", "firestore"] = "memory"

    # LLM service
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"

    # Retry / stability
    openai_retries_http: int = Field(default=1, ge=0)
    openai_retries_empty: int = Field(default=2, ge=0)
    openai_retries_invalid_json: int = Field(default=2, ge=0)
    openai_retry_base_delay_ms: int = Field(default=350, ge=0)
    openai_timeout_ms: int = Field(default=60000, ge=0)

    # Request limits
    default_max_sections: int = 10
    max_sections_cap: int = 12


@dataclass(frozen=True)
class RetryPolicy:
    http_retries: int = 1
    empty_retries: int = 2
    invalid_json_retries: int = 2
    base_delay: float = 0.35
    timeout: float = 60.0

    @classmethod
    def from_settings(cls, settings: AutogenSettings) -> "RetryPolicy":
        return cls(
            http_retries=settings.openai_retries_http,
            empty_retries=settings.openai_retries_empty,
            invalid_json_retries=settings.openai_retries_invalid_json,
            base_delay=settings.openai_retry_base_delay_ms / 1000,
            timeout=settings.openai_timeout_ms / 1000,
        )

    def delay(self, attempt: int) -> float:
        """Linear backoff: base delay times the tier attempt number."""
        return self.base_delay * attempt


@lru_cache
def get_settings() -> AutogenSettings:
    """Get cached settings instance."""
    return AutogenSettings()


__all__ = ["AutogenSettings", "RetryPolicy", "get_settings"]
