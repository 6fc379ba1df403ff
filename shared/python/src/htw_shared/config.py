"""
config.py — Environment-driven settings for the HTW network tools.

The import pipeline, the analytics builder, the CLI and the API all read
the one ``settings`` instance defined at the bottom of this module. Values
come from environment variables (case-insensitive) or the nearest ``.env``
file above the working directory.

Usage:
    from htw_shared.config import settings

    limit = settings.import_max_rows
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from htw_shared.constants import Timeframe


def _nearest_dotenv(start: Path | None = None) -> Path | None:
    start = start or Path.cwd()
    for directory in (start, *start.parents):
        if (directory / ".env").is_file():
            return directory / ".env"
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_nearest_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Hosted database. The anon key serves reads; imports need the service key.
    supabase_url: str = Field(default="http://localhost:54321")
    supabase_anon_key: str = Field(default="")
    supabase_service_key: str = Field(default="")

    # Comma-separated browser origins allowed by the API (the admin dashboard)
    cors_origins: str = Field(default="http://localhost:5173,http://localhost:8080")

    # A CSV upload is sent as one insert; larger files are refused before writing
    import_max_rows: int = Field(default=5000, ge=1)

    default_timeframe: Timeframe = Field(default="quarterly")
    top_n: int = Field(default=5, ge=1, description="Length of ranked dashboard lists")

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @field_validator("supabase_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        v = v.strip().upper() if isinstance(v, str) else v
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def lower_format(cls, v: str) -> str:
        v = v.strip().lower() if isinstance(v, str) else v
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


settings = Settings()
