"""
Pydantic models for token responses.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from token_api.clients.token_store import TokenRecord


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class TokenResponse(BaseModel):
    """Token representation returned by both create and list."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Store-assigned token identifier.")
    user_id: str = Field(..., alias="userId", description="Owning principal.")
    scopes: list[str] = Field(
        default_factory=list, description="Permission tags in caller order."
    )
    created_at: datetime = Field(..., alias="createdAt")
    expires_at: datetime = Field(..., alias="expiresAt")
    secret: str = Field(..., description="Opaque bearer credential.")

    @field_serializer("created_at", "expires_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_record(cls, record: TokenRecord) -> "TokenResponse":
        return cls(
            id=record.id,
            user_id=record.user_id,
            scopes=list(record.scopes),
            created_at=record.created_at,
            expires_at=record.expires_at,
            secret=record.secret,
        )


class ErrorResponse(BaseModel):
    """Envelope for every error the API returns."""

    error: str


__all__ = ["ErrorResponse", "TokenResponse", "format_timestamp"]
