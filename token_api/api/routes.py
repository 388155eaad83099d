"""
FastAPI routes for issuing and listing bearer tokens.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Query, Request

from token_api.core.errors import ValidationError
from token_api.dependencies import get_api_key_guard, get_token_service
from token_api.schemas import ErrorResponse, TokenResponse
from token_api.services import ApiKeyGuard, TokenService, parse_create_token_request
from token_api.services.validation import BODY_NOT_OBJECT

router = APIRouter()
logger = logging.getLogger(__name__)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def require_api_key(
    guard: Annotated[ApiKeyGuard, Depends(get_api_key_guard)],
    x_api_key: str | None = Header(
        default=None,
        alias="x-api-key",
        description="Shared secret authorizing token operations.",
    ),
) -> None:
    """Reject the request before any body parsing when the key is wrong."""
    guard.verify(x_api_key)


async def _read_json_body(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ValidationError(BODY_NOT_OBJECT) from exc


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post(
    "/tokens",
    response_model=TokenResponse,
    status_code=HTTPStatus.CREATED,
    dependencies=[Depends(require_api_key)],
    responses={400: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def create_token(
    request: Request,
    service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """Issue a new token. The plaintext secret is only returned here and in listings."""
    payload = parse_create_token_request(await _read_json_body(request))
    record = service.issue(
        user_id=payload.user_id,
        scopes=payload.scopes,
        expires_in_minutes=payload.expires_in_minutes,
    )
    return TokenResponse.from_record(record)


@router.get(
    "/tokens",
    response_model=list[TokenResponse],
    status_code=HTTPStatus.OK,
    dependencies=[Depends(require_api_key)],
    responses={400: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def list_tokens(
    service: Annotated[TokenService, Depends(get_token_service)],
    user_id: str | None = Query(
        default=None,
        alias="userId",
        description="Owner whose active tokens should be listed.",
    ),
) -> list[TokenResponse]:
    """List a user's unexpired tokens, newest first."""
    if user_id is None or not user_id.strip():
        raise ValidationError("`userId` query parameter is required")

    user_id = user_id.strip()
    records = service.list_active(user_id=user_id)
    logger.debug("Listing %d active tokens for user %s", len(records), user_id)
    return [TokenResponse.from_record(record) for record in records]


__all__ = ["require_api_key", "router"]
