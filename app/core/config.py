"""
LegalEase File - Application Settings
Loaded from environment variables (and an optional .env file).
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the filing service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "LegalEase File"
    app_version: str = "1.0.0"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    # Database
    database_url: str = "sqlite+aiosqlite:///./legalease.db"

    # OpenAI (document classification / generation)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_base_url: str = "https://api.openai.com/v1"

    # Compliance pipeline
    classifier_timeout_seconds: float = 30.0
    classifier_max_chars: int = 4000
    emergency_max_chars: int = 3000
    default_jurisdiction: str = "Massachusetts"
    default_court_id: str = "ma-fed-district"
    emergency_judge: Literal["keyword", "llm"] = "keyword"
    emergency_judge_timeout_seconds: float = 30.0

    # Uploads
    max_upload_size_mb: int = 10
    allowed_mime_types: str = (
        "application/pdf,"
        "application/msword,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
        "text/plain"
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:5173,http://localhost:5000"

    # Request handling
    request_timeout_seconds: float = 60.0
    rate_limit_default: str = "200/minute"
    rate_limit_enabled: bool = True

    # Case store field encryption
    case_store_secret: str = "change-me-in-production"

    @field_validator("openai_model", "default_court_id", mode="before")
    @classmethod
    def strip_identifiers(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def allowed_mime_types_set(self) -> set[str]:
        return {m.strip() for m in self.allowed_mime_types.split(",") if m.strip()}

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (usable as a FastAPI dependency)."""
    return Settings()
