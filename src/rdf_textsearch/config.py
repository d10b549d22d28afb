"""Centralized configuration for rdf-textsearch using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Values come from ``RDF_TEXTSEARCH_*`` environment variables (or a local
    ``.env`` file) and act as defaults for every index built in the process.
    Explicit constructor arguments on ``TextIndex`` take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="RDF_TEXTSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Fuzzy matching
    fuzzy_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Highest per-field score (0 = exact substring, 1 = unrelated) still accepted as a match",
    )
    case_sensitive: bool = Field(default=False, description="Compare query and values case-sensitively")

    # Logging
    log_level: LogLevel = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON log lines")

    # Observability
    service_name: str = Field(default="rdf-textsearch", description="Service name for traces and metrics")

    @field_validator("log_level", mode="before")
    @classmethod
    def _lower_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


_settings_holder: dict[str, Settings | None] = {"settings": None}


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    settings = _settings_holder["settings"]
    if settings is None:
        settings = Settings()
        _settings_holder["settings"] = settings
    return settings


def reset_settings() -> None:
    """Drop cached settings so the next ``get_settings`` call re-reads the environment."""
    _settings_holder["settings"] = None
