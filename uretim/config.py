"""
Configuration Management Module

Responsibilities:
1. Read database and API settings from environment variables (preferred)
2. Read report cache settings from report_config.json
3. Config validation and defaults

Environment Variables:
    URETIM_DB_PATH                  - SQLite database path
    URETIM_API_LOG_LEVEL            - Logging level (default: INFO)
    URETIM_API_LOG_FILE             - Optional log file path (default: stdout only)
    URETIM_API_REPORTS_RATE_LIMIT   - slowapi limit string for report endpoints
    URETIM_API_CORS_ALLOWED_ORIGINS - Comma-separated list of allowed origins
    URETIM_CACHE_ENABLED            - Opt in to the in-memory report cache (default: false)
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from uretim.exceptions import ConfigError


class DatabaseConfig(BaseSettings):
    """SQLite database shared with the production-tracking CRUD system."""

    model_config = SettingsConfigDict(
        env_prefix="URETIM_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: Path = Field(default=Path("data/uretim.db"), description="SQLite database path")


class ApiConfig(BaseSettings):
    """HTTP surface configuration."""

    model_config = SettingsConfigDict(
        env_prefix="URETIM_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Root logging level")
    reports_rate_limit: str = Field(default="120/minute", description="Rate limit for report endpoints")
    log_file: Optional[Path] = Field(default=None, description="Also write logs to this file")
    cors_allowed_origins: str = Field(default="", description="Comma-separated CORS origins")

    @field_validator("log_level")
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


class ReportCacheConfig(BaseSettings):
    """In-memory report cache configuration."""

    model_config = SettingsConfigDict(
        env_prefix="URETIM_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cached reports are not invalidated when the entity tables change.
    enabled: bool = Field(False, description="Enable in-memory report cache")
    max_size: int = Field(500, ge=10, le=10000, description="Max cached reports per namespace")
    ttl_seconds: int = Field(600, ge=10, le=7200, description="Cache TTL in seconds")

    @classmethod
    def load(cls, path: str = "report_config.json") -> "ReportCacheConfig":
        """Load cache settings from the ``report_cache`` section of a JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            return cls()
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
        return cls(**data.get("report_cache", {}))


class Config:
    """Main Config Class - Factory Pattern (NOT Singleton).

    Build with ``Config.load()``; the app reads it through ``get_config()``.
    """

    def __init__(
        self,
        database: DatabaseConfig,
        api: ApiConfig,
        report_cache: ReportCacheConfig,
    ):
        self.database = database
        self.api = api
        self.report_cache = report_cache

    @property
    def db_path(self) -> Path:
        return self.database.path

    @classmethod
    def load(cls, report_config_path: str = "report_config.json") -> "Config":
        """Factory method to load config.

        Database and API settings: Environment variables > .env
        Report cache settings: report_config.json
        """
        return cls(
            database=DatabaseConfig(),
            api=ApiConfig(),
            report_cache=ReportCacheConfig.load(report_config_path),
        )


@lru_cache()
def get_config() -> Config:
    """Get config instance (cached for performance)."""
    return Config.load()
