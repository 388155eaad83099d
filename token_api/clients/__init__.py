"""Expose persistence clients."""

from .token_store import SQLiteTokenStore, TokenRecord

__all__ = ["SQLiteTokenStore", "TokenRecord"]
