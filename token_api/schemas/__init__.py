"""Public schema exports."""

from .token import ErrorResponse, TokenResponse, format_timestamp

__all__ = ["ErrorResponse", "TokenResponse", "format_timestamp"]
