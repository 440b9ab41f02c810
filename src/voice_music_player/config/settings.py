"""Runtime configuration for the playback engine.

Values come from the process environment and an optional ``.env`` file.
Nested sections use a double underscore, e.g. ``DATABASE__URL`` or
``CATALOG__CLIENT_ID``. Every section is frozen once loaded.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import BusyTimeoutMs, ConnectionTimeoutS, HttpTimeoutS, HttpUrlStr

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseModel):
    """Where playback sessions are stored and how long to wait on a locked file."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/sessions.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: BusyTimeoutMs = Field(
        default=5000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: ConnectionTimeoutS = Field(
        default=10,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def require_sqlite(cls, url: str) -> str:
        if not url.startswith("sqlite://"):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return url


class CatalogSettings(BaseModel):
    """Remote catalog endpoint and the application's client id."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    api_base_url: HttpUrlStr = Field(
        default="https://api.soundcloud.com",
        validation_alias=AliasChoices("api_base_url", "base_url", "api_url"),
    )
    client_id: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("client_id", "catalog_client_id"),
    )
    timeout_s: HttpTimeoutS = Field(
        default=10.0,
        validation_alias=AliasChoices("timeout_s", "timeout"),
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, url: str) -> str:
        return url.rstrip("/")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, level: str) -> str:
        normalized = level.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=level, valid_levels=", ".join(LOG_LEVELS))
            )
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process; environment variables win over ``.env``."""
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
