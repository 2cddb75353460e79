"""Configuration management for MetaView."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Every field can be overridden by the environment variable of the same
    name in upper case (e.g. ``META_ENDPOINT``) or by a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "MetaView"
    debug: bool = False

    # Data source
    meta_endpoint: str = Field(default="http://127.0.0.1:8000/api/components/meta")
    meta_fetch_timeout: Optional[float] = Field(default=None, gt=0)  # None waits indefinitely

    # Development API: JSON file served as the meta payload
    meta_source_file: Optional[str] = None

    # Presentation
    default_view: str = Field(default="table", pattern="^(table|cards)$")

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_timezone: str = "UTC"


# Global settings instance
settings = Settings()
