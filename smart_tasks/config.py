"""
Configuration module for the task data layer.

Centralized configuration management using Pydantic settings. All values
can be overridden via environment variables or a .env file.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings for the task repository and its data sources.

    Attributes:
        APP_NAME: Display name used in the User-Agent header and logs
        ENVIRONMENT: Deployment flavour (development, staging, production)
        LOG_LEVEL: Logging level
        LOG_JSON: Render logs as JSON instead of console output
        TASKS_API_URL: Base URL of the task API
        TASKS_ENDPOINT: Collection path of the task resource
        REQUEST_TIMEOUT: Connect/read/write timeout in seconds
        API_TOKEN: Optional bearer token sent with every request
        CACHE_BACKEND: Where the local snapshot lives (file or redis)
        CACHE_FILE_PATH: Snapshot file for the file backend
        REDIS_URL: Connection URL for the redis backend
        CACHE_KEY: Redis key holding the snapshot
    """

    APP_NAME: str = Field(default="Smart Task Manager", description="Application name")
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Render structured logs as JSON",
    )

    # Remote API
    TASKS_API_URL: str = Field(
        default="https://jsonplaceholder.typicode.com",
        description="Base URL of the task API",
    )
    TASKS_ENDPOINT: str = Field(
        default="/tasks",
        description="Collection path of the task resource",
    )
    REQUEST_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        le=120.0,
        description="HTTP timeout in seconds",
    )
    API_TOKEN: Optional[str] = Field(
        default=None,
        description="Bearer token for the task API",
    )

    # Local cache
    CACHE_BACKEND: Literal["file", "redis"] = Field(
        default="file",
        description="Local snapshot backend",
    )
    CACHE_FILE_PATH: str = Field(
        default=".local/smart_tasks/tasks.json",
        description="Snapshot file used by the file backend",
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL used by the redis backend",
    )
    CACHE_KEY: str = Field(
        default="smart_tasks:snapshot",
        description="Redis key holding the snapshot",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("TASKS_API_URL")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """
        Validate the API base URL.

        Args:
            value: The URL to validate

        Returns:
            The URL without trailing slash

        Raises:
            ValueError: If URL is empty or not http(s)
        """
        if not value:
            raise ValueError("TASKS_API_URL cannot be empty")

        value = value.rstrip("/")

        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError(f"TASKS_API_URL must start with http:// or https://, got: {value}")

        return value

    @field_validator("TASKS_ENDPOINT")
    @classmethod
    def validate_endpoint(cls, value: str) -> str:
        """Normalize the collection path to a leading slash and no trailing slash."""
        value = value.strip().strip("/")
        if not value:
            raise ValueError("TASKS_ENDPOINT cannot be empty")
        return f"/{value}"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()
