"""
Application Settings

Type-safe configuration using Pydantic Settings with environment variable
support. Every value can be overridden with a TAILORING_-prefixed variable
(e.g. TAILORING_DATABASE_URL) or a .env file.

Settings are built once at startup and passed explicitly to the app factory,
the database engine and the logging setup.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants import PagingDefaults, ServerConfig


class Settings(BaseSettings):
    """Backend configuration"""

    model_config = SettingsConfigDict(
        env_prefix="TAILORING_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_name: str = Field("Tailoring Shop API", description="Title shown in the OpenAPI docs")
    environment: str = Field("development", description="Deployment environment name")
    debug: bool = Field(False, description="Enable debug behaviour")

    database_url: str = Field("sqlite:///./tailoring.db", description="SQLAlchemy database URL")
    database_echo: bool = Field(False, description="Log every SQL statement")

    log_level: str = Field("INFO", description="Root log level")
    log_dir: Optional[str] = Field(None, description="Directory for the rotating backend.log; console only when unset")
    log_max_bytes: int = Field(10 * 1024 * 1024, description="Rotate log file after this many bytes")
    log_backup_count: int = Field(5, description="Number of rotated log files to keep")

    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    default_page_size: int = Field(PagingDefaults.PAGE_SIZE, ge=1, description="Page size when none is given")
    max_page_size: int = Field(PagingDefaults.MAX_PAGE_SIZE, ge=1, description="Largest page size accepted")

    api_host: str = Field(ServerConfig.HOST, description="Bind address for uvicorn")
    api_port: int = Field(ServerConfig.PORT, description="Bind port for uvicorn")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one logging understands."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()
