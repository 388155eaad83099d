"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from token_api.clients import SQLiteTokenStore
from token_api.core.config import AppSettings
from token_api.dependencies.config import SettingsDependency
from token_api.services import ApiKeyGuard, TokenService


@lru_cache()
def _store_for_path(database_path: str) -> SQLiteTokenStore:
    return SQLiteTokenStore(database_path)


def get_token_store(settings: AppSettings = SettingsDependency) -> SQLiteTokenStore:
    """Provide the SQLite token store shared by every request."""
    return _store_for_path(settings.database_path)


def get_token_service(settings: AppSettings = SettingsDependency) -> TokenService:
    """Build a token service over the shared store."""
    return TokenService(get_token_store(settings))


def get_api_key_guard(settings: AppSettings = SettingsDependency) -> ApiKeyGuard:
    """Provide the API key guard built from the configured key."""
    return ApiKeyGuard(api_key=settings.api_key)


__all__ = ["get_api_key_guard", "get_token_service", "get_token_store"]
