"""
FastAPI application entrypoint for the token API.
"""

from __future__ import annotations

from fastapi import FastAPI

from token_api.api.errors import register_error_handlers
from token_api.api.routes import router as api_router
from token_api.core.config import AppSettings, get_settings
from token_api.core.logging import configure_logging
from token_api.dependencies import get_app_settings


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Factory for the FastAPI application.

    When ``settings`` is given it replaces the environment-derived settings
    for every dependency of this app instance.
    """
    explicit = settings is not None
    settings = settings or get_settings()
    configure_logging(settings.log_level, access_log_level=settings.access_log_level)

    app = FastAPI(
        title="Bearer Token API",
        version="0.1.0",
        description="Issues opaque bearer tokens and lists the active ones per user.",
    )
    if explicit:
        app.dependency_overrides[get_app_settings] = lambda: settings
    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()

__all__ = ["app", "create_app"]
