"""Application configuration powered by environment variables."""
from __future__ import annotations

from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load variables from a local .env file if present. This keeps runtime flexible.
load_dotenv()


class Settings(BaseSettings):
    """Strongly typed configuration for the service."""

    app_name: str = "bouncehook"
    environment: str = "development"
    api_version: str = "v1"
    database_url: str = "sqlite:///./bouncehook.db"
    mailer_dsn: str = "ses+api://@default?region=us-east-1"
    ses_transport_scheme: str = "ses+api"
    locale: str = "en"
    sns_subscribe_timeout_seconds: int = 10
    log_level: str | None = None
    allowed_origins: List[str] = ["http://localhost", "http://localhost:3000"]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("database_url", "mailer_dsn", mode="before")
    @classmethod
    def strip_wrapping_quotes(cls, value: str) -> str:
        """Allow quoted URLs in env files."""
        if isinstance(value, str):
            return value.strip().strip('"').strip("'")
        return value

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | List[str]) -> List[str]:
        """Allow comma separated origins in env files."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log_level {value!r}")
        return level

    @field_validator("sns_subscribe_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("sns_subscribe_timeout_seconds must be positive")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance for reuse across the app."""

    return Settings()


settings = get_settings()
