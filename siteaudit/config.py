"""Configuration management using environment variables."""

import sys
from functools import lru_cache

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from siteaudit.core.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from siteaudit.web.performance import PERFORMANCE_TIMEOUT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Fetching
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        alias="USER_AGENT"
    )
    fetch_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT,
        alias="FETCH_TIMEOUT_SECONDS"
    )
    performance_timeout_seconds: float = Field(
        default=PERFORMANCE_TIMEOUT,
        alias="PERFORMANCE_TIMEOUT_SECONDS"
    )

    # API server
    host: str = Field(
        default="0.0.0.0",
        alias="HOST"
    )
    port: int = Field(
        default=5000,
        alias="PORT"
    )
    frontend_url: str = Field(
        default="http://localhost:8080",
        alias="FRONTEND_URL"
    )
    environment: str = Field(
        default="production",
        alias="ENVIRONMENT"
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL"
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
