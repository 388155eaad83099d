"""
Application configuration models and helpers.

Settings are read from the environment (prefix ``TOKEN_API_``) and an optional
``.env`` file. The API key is passed explicitly into the authorization guard
rather than read from the environment at request time.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


class AppSettings(BaseSettings):
    """Root settings object for the token API."""

    model_config = SettingsConfigDict(env_prefix="TOKEN_API_", extra="ignore")

    environment: str = Field("development")
    log_level: str = Field("INFO")
    access_log_level: str = Field(
        "WARNING", description="Level for uvicorn's per-request access log."
    )
    api_key: Optional[str] = Field(
        None,
        description=(
            "Shared secret expected in the x-api-key header. When unset every "
            "token request fails closed."
        ),
    )
    database_path: str = Field(
        "data/tokens.db", description="SQLite file holding issued tokens."
    )
    api_prefix: str = Field("/api", description="Mount point for the HTTP router.")

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only key as not configured."""
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    _load_env_file()
    return AppSettings()


__all__ = ["AppSettings", "get_settings"]
