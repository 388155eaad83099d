"""
Logging setup for the token API process.

The API writes its own INFO lines (token issued, id and owner). Uvicorn's
per-request access log repeats every ``GET /tokens?userId=...`` line and is
held at a separate, quieter level.
"""

import logging
import sys

ACCESS_LOGGER = "uvicorn.access"


def configure_logging(level: str = "INFO", *, access_log_level: str = "WARNING") -> None:
    """Configure root logging and the uvicorn access logger."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger(ACCESS_LOGGER).setLevel(access_log_level.upper())


__all__ = ["ACCESS_LOGGER", "configure_logging"]
