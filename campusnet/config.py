"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./campusnet.db",
        description="Database connection URL used by SQLAlchemy for the key-value table",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name or UTC offset used for generated timestamps",
    )
    notifications_key: str = Field(
        default="notifications",
        description="Storage key holding the serialized notification collection",
        min_length=1,
    )
    users_key: str = Field(
        default="users",
        description="Storage key holding the user registry read by broadcasts",
        min_length=1,
    )
    notification_templates_key: str = Field(
        default="notification_templates",
        description="Storage key holding saved admin compose templates",
        min_length=1,
    )
    new_user_window_days: int = Field(
        default=30,
        description="Number of days a user is considered part of the 'new' cohort",
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
