"""
Configuration management for HR Desk.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hrdesk.utils.constants import MAX_PAGE_LIMIT


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent.parent
LOGS_DIR = ROOT_DIR / "logs"


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_", env_file=".env", extra="ignore")

    host: str = "localhost"
    port: int = 27017
    name: str = "hr_desk"
    username: str | None = None
    password: str | None = None
    server_selection_timeout_ms: int = 5000



class PaginationSettings(BaseSettings):
    """Defaults applied when a caller omits page or limit."""

    model_config = SettingsConfigDict(env_prefix="PAGE_", env_file=".env", extra="ignore")

    default_page: int = Field(default=1, ge=1)
    default_limit: int = Field(default=10, ge=1, le=MAX_PAGE_LIMIT)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = LOGS_DIR / "hr_desk.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True

    # Lifecycle changes and access denials
    audit_file_path: Path = LOGS_DIR / "audit.log"
    audit_rotation: str = "1 week"
    audit_retention: str = "1 year"


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "HR Desk"
    version: str = "0.1.0"
    description: str = "Job posting and application tracking"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
