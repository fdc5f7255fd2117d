"""Application configuration using Pydantic V2."""

import sys
from functools import lru_cache

from loguru import logger
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings and configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="mentorship-admin-dashboard", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Supabase backend
    supabase_url: str = Field(
        validation_alias=AliasChoices("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
        description="Base URL of the Supabase project",
    )
    supabase_key: SecretStr = Field(
        validation_alias=AliasChoices(
            "SUPABASE_ANON_KEY", "SUPABASE_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"
        ),
        description="Access key sent as apikey and bearer token",
    )
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    queries_limit: int = Field(default=100, gt=0, description="Row cap for the query list")

    @property
    def rest_url(self) -> str:
        """PostgREST root of the project."""
        return self.supabase_url.rstrip("/") + "/rest/v1"


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        pydantic.ValidationError: If the Supabase URL or key is missing
    """
    return Settings()  # type: ignore[call-arg]


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
