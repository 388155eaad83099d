"""Exception handlers rendering every failure as ``{"error": ...}``."""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from token_api.core.errors import TokenApiError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TokenApiError)
    async def handle_token_api_error(request: Request, exc: TokenApiError) -> JSONResponse:
        if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.detail,
                exc_info=exc,
            )
        return error_response(exc.public_message, exc.status_code)

    # Anything else is a bug; the caller only sees the generic message.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc
        )
        return error_response(
            "Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR
        )


__all__ = ["error_response", "register_error_handlers"]
