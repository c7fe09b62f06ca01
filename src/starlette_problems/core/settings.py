"""Extension settings powered by :mod:`pydantic_settings`."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic.functional_validators import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExceptionLogLevel(str, Enum):
    """How much of an intercepted exception the failure hook logs."""

    OFF = "off"
    SHORT = "short"
    FULL = "full"


class ProblemSettings(BaseSettings):
    """Centralized configuration for the problem details extension."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    log_level: str = Field(
        default="INFO",
        alias="PROBLEMS_LOG_LEVEL",
        description="Minimum level emitted by the extension's structured logger.",
    )
    exception_logging: ExceptionLogLevel = Field(
        default=ExceptionLogLevel.FULL,
        alias="PROBLEMS_EXCEPTION_LOGGING",
        description="Verbosity used when logging exceptions caught by the failure hook.",
    )
    enable_automatic_response_conversion: bool = Field(
        default=True,
        alias="PROBLEMS_AUTOMATIC_RESPONSE_CONVERSION",
        description="Rewrite responses that already carry an error status into problems.",
    )
    logger_name: str = Field(
        default="starlette_problems",
        alias="PROBLEMS_LOGGER_NAME",
        description="Name bound to the structured logger used by the hooks.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("exception_logging", mode="before")
    @classmethod
    def _normalize_exception_logging(cls, value: str | ExceptionLogLevel) -> str | ExceptionLogLevel:
        if isinstance(value, str) and not isinstance(value, ExceptionLogLevel):
            return value.strip().lower()
        return value


@lru_cache
def get_settings() -> ProblemSettings:
    """Return a cached settings instance."""

    return ProblemSettings()


__all__ = ["ExceptionLogLevel", "ProblemSettings", "get_settings"]
