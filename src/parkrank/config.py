"""Application configuration via environment variables."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARKRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Database
    db_path: Path = Field(
        default=Path.home() / ".config" / "parkrank" / "parkrank.db",
        description="Path to SQLite database file",
    )
    db_timeout_seconds: float = Field(
        default=5.0,
        description="How long a connection waits on a locked database before failing",
    )
    seed_on_startup: bool = Field(
        default=False,
        description="Insert the built-in national parks when the database is empty",
    )

    # Rating
    k_factor: float = Field(default=32.0, gt=0, description="Maximum Elo swing per vote")
    trending_threshold: int = Field(
        default=10,
        ge=0,
        description="Rating swing above which a park is flagged as trending",
    )
    default_rating: int = Field(default=1500, description="Rating given to new parks")

    # Server
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Root log level")


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
