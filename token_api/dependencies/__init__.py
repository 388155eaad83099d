"""Expose dependency helpers for FastAPI routers."""

from .clients import get_api_key_guard, get_token_service, get_token_store
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_api_key_guard",
    "get_app_settings",
    "get_token_service",
    "get_token_store",
]
