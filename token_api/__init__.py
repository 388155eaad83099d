"""Opaque bearer token issuance service."""
