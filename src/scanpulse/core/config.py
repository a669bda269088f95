# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCANPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Upstream sources
    virustotal_api_key: str = ""
    virustotal_url: str = ""
    virustotal_timeout: float = 10.0

    nvd_api_key: str = ""
    nvd_url: str = ""
    nvd_timeout: float = 15.0

    malwarebazaar_api_key: str = ""
    malwarebazaar_url: str = ""
    malwarebazaar_timeout: float = 10.0

    # Aggregation
    feed_size: int = 50
    trend_period_days: int = Field(default=7, ge=1)

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v if isinstance(v, list) else []

    @field_validator("feed_size")
    @classmethod
    def _check_feed_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("feed_size must be non-negative")
        return v

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


def get_settings() -> Settings:
    return Settings()
