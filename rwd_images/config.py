from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Uploads
    uploads_base_url: str = Field(
        "http://localhost/uploads",
        validation_alias="UPLOADS_BASE_URL",
        description="Public base URL of the uploads directory.",
    )

    # Media backend selection
    media_backend: str = Field("memory", validation_alias="MEDIA_BACKEND")
    media_root: Path = Field(
        Path("uploads"),
        validation_alias="MEDIA_ROOT",
        description="Directory holding images and their <id>.json metadata sidecars.",
    )

    # Size registrations loaded at startup
    sizes_file: Optional[Path] = Field(default=None, validation_alias="SIZES_FILE")

    # Firebase
    project_id: Optional[str] = Field(default=None, validation_alias="PROJECT_ID", description="GCP project ID")
    firebase_credentials_json: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_APPLICATION_CREDENTIALS",
        description="Path to service-account JSON file or JSON string itself.",
    )

    # Markup
    picture_class: str = Field("attachment-{key} size-{key} rwd-picture", validation_alias="PICTURE_CLASS")
    eol: str = Field("\n", validation_alias="MARKUP_EOL")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
