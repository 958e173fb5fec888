"""
Application configuration using Pydantic Settings.

All settings are loaded from environment variables or .env file.
Nothing about the dataset location or presentation is hardcoded elsewhere.
"""

from pathlib import Path
from typing import Annotated, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_CARD_THEMES = ["theme-coral", "theme-sage", "theme-slate", "theme-amber"]


class DataSettings(BaseSettings):
    """Where the static restaurant document lives."""

    source: str = "data/restaurants.json"
    timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix="DATA_")

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))


class RouterSettings(BaseSettings):
    """Fragment router configuration."""

    history_limit: int = 50
    default_fragment: str = "#/"

    model_config = SettingsConfigDict(env_prefix="ROUTER_")


class RenderSettings(BaseSettings):
    """Template rendering configuration."""

    site_title: str = "London Restaurant Directory"
    card_themes: Annotated[list[str], NoDecode] = DEFAULT_CARD_THEMES

    model_config = SettingsConfigDict(env_prefix="RENDER_")

    @field_validator("card_themes", mode="before")
    @classmethod
    def parse_card_themes(cls, v: str | list[str] | None) -> list[str]:
        if v is None or v == "":
            return list(DEFAULT_CARD_THEMES)
        if isinstance(v, str):
            themes = [t.strip() for t in v.split(",") if t.strip()]
            return themes or list(DEFAULT_CARD_THEMES)
        return v


class APISettings(BaseSettings):
    """FastAPI server settings for the dataset endpoint."""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="API_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    # Blank LOG_FILE means console-only logging
    file: Optional[str] = "logs/restaurant_directory.log"

    model_config = SettingsConfigDict(env_prefix="LOG_")

    @field_validator("file", mode="before")
    @classmethod
    def blank_file_disables(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Settings(BaseSettings):
    """Main application settings: aggregates all sub-settings."""

    data: DataSettings = DataSettings()
    router: RouterSettings = RouterSettings()
    render: RenderSettings = RenderSettings()
    api: APISettings = APISettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def setup(self) -> None:
        """Initialize application: make sure the log directory exists."""
        if self.logging.file:
            Path(self.logging.file).parent.mkdir(parents=True, exist_ok=True)


# Global settings instance: import this in other modules
settings = Settings()
