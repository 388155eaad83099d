"""
FastAPI dependency for injecting configuration.

``create_app(settings)`` overrides ``get_app_settings`` on its app instance, so
every dependency that takes ``SettingsDependency`` follows explicit settings.
"""

from fastapi import Depends

from token_api.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """Return the process-wide settings loaded from the environment."""
    return get_settings()


SettingsDependency = Depends(get_app_settings)

__all__ = ["SettingsDependency", "get_app_settings"]
