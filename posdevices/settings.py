from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "POS Device Configuration"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8090

    # Upstream device-management API (the store back office).
    HARDWARE_API_BASE_URL: str = "http://localhost:8000/api/v1"
    HARDWARE_API_TOKEN: str = Field(
        default="", validation_alias=AliasChoices("HARDWARE_API_TOKEN", "API_TOKEN")
    )
    HARDWARE_API_TIMEOUT: float = 10.0
    TENANT_ID: str = ""
    STORE_ID: str = ""

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported LOG_LEVEL {value!r}")
        return level

    @field_validator("HARDWARE_API_BASE_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: object) -> str:
        return str(value or "").strip().rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
