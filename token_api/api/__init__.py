"""HTTP layer for the token API."""
