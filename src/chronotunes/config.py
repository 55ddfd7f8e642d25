"""Configuration settings using pydantic-settings for environment variable loading."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CatalogMode = Literal["auto", "json", "sheets"]


class Settings(BaseSettings):
    """Application settings loaded from CHRONOTUNES_* environment variables.

    Reads a .env file as well; real environment variables take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONOTUNES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Catalog
    catalog_path: Path = Path("songs.json")
    catalog_source: CatalogMode = "auto"

    # Google Sheets
    google_sheets_id: str | None = None
    google_sheets_api_key: str | None = None
    google_sheets_access_token: str | None = None
    google_sheets_tab: str = "Sheet1"

    # Remote catalog snapshot cache
    cache_path: Path = Field(default_factory=lambda: Path.home() / ".chronotunes" / "cache.db")
    cache_ttl_hours: int = Field(default=1, ge=0)

    # Playlist
    playlist_size: int = Field(default=10, ge=1)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
