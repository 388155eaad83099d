"""Operator check for the token API environment file.

``check`` loads ``AppSettings`` from the env file and fails when no API key is
configured, because the service would answer every token request with 500.
``record`` additionally stores a SHA-256 baseline of the file and ``verify``
compares the file against that baseline to catch unreviewed edits.

Example usages::

    python -m scripts.check_env record --env-file /opt/tokens/.env \
        --hash-file /opt/tokens/.env.sha256

    python -m scripts.check_env verify --env-file /opt/tokens/.env \
        --hash-file /opt/tokens/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path

from pydantic import ValidationError

from token_api.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


class MissingApiKeyError(Exception):
    """Settings loaded but ``TOKEN_API_API_KEY`` is absent or blank."""


def _checksum(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def load_settings(env_file: Path) -> AppSettings:
    """Load settings from ``env_file`` and insist on a configured API key."""
    if not env_file.exists():
        raise FileNotFoundError(f"Environment file {env_file} does not exist.")
    _load_env_file(str(env_file))
    settings = AppSettings()
    if settings.api_key is None:
        raise MissingApiKeyError(
            "TOKEN_API_API_KEY is not set; token requests would fail closed."
        )
    return settings


def record_baseline(env_file: Path, hash_file: Path) -> int:
    checksum = _checksum(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded {checksum} to {hash_file}")
    return EXIT_OK


def verify_baseline(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"No baseline at {hash_file}; run 'record' first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _checksum(env_file)
    if expected != actual:
        print(
            f"{env_file} changed since the baseline was recorded "
            f"(expected {expected}, found {actual}).",
            file=sys.stderr,
        )
        return EXIT_CHECKSUM_ERROR
    print("Environment checksum OK.")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate token API settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for command, needs_hash, help_text in (
        ("check", False, "Validate settings only."),
        ("record", True, "Validate settings and write the checksum baseline."),
        ("verify", True, "Validate settings and compare against the baseline."),
    ):
        subparser = subparsers.add_parser(command, help=help_text)
        subparser.add_argument("--env-file", default=Path(".env"), type=Path)
        if needs_hash:
            subparser.add_argument("--hash-file", required=True, type=Path)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        load_settings(args.env_file)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValidationError as exc:
        print(f"Invalid settings:\n{exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except MissingApiKeyError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Unexpected error during validation: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        if args.command == "record":
            return record_baseline(args.env_file, args.hash_file)
        if args.command == "verify":
            return verify_baseline(args.env_file, args.hash_file)
    except OSError as exc:
        print(f"Checksum {args.command} failed: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
