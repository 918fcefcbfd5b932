"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    service_name: str = Field(
        default="API REST Agropecuario",
        description="Server identity reported by the statistics endpoint",
    )
    service_version: str = Field(
        default="2.0.0",
        description="API version reported by the statistics endpoint",
    )
    timezone: str = Field(
        default="America/Bogota",
        description="IANA timezone used for every timestamp the service produces",
    )

    # =========================================================================
    # Seed data
    # =========================================================================
    seed_on_startup: bool = Field(
        default=True,
        description="Populate the stores with the demonstration products and harvests",
    )
    seed_path: str | None = Field(
        default=None,
        description="Alternative seed YAML file (defaults to the packaged seed.yaml)",
    )

    # =========================================================================
    # HTTP
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to",
    )
    port: int = Field(
        default=8081,
        description="Port uvicorn listens on",
    )
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON outside dev",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
