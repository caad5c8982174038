"""Application configuration loaded from the environment."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings that come from environment variables or a local .env file."""

    app_name: str = "Bookstore API"
    environment: Literal["development", "production", "test"] = "development"

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./bookstore.db")
    database_echo: bool = False

    # Logging
    log_level: str = "INFO"

    # OpenTelemetry
    otel_enabled: bool = False
    otel_service_name: str = "bookstore-api"
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"
    otel_exporter_otlp_protocol: Literal["grpc", "http"] = "grpc"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
