"""Process settings read from the environment."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .const import DEFAULT_REQUEST_TIMEOUT_SECONDS, DEFAULT_TIMEOUT_SECONDS

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Exporter settings; environment variables override the defaults."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    TIMEOUT_SECONDS: int = Field(
        DEFAULT_TIMEOUT_SECONDS,
        ge=0,
        description="Seconds to browse for devices each cycle.",
    )
    REQUEST_TIMEOUT_SECONDS: float = Field(
        DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Total seconds allowed for each device HTTP request.",
    )
    LOG_LEVEL: str = Field("INFO", description="DEBUG, INFO, WARNING or ERROR.")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level, unknown levels fall back to INFO."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            return "INFO"
        return level
