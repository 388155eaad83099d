try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from token_api.core.config import AppSettings
from token_api.core.errors import AuthError, ConfigError
from token_api.services.auth import ApiKeyGuard


def test_matching_key_passes() -> None:
    ApiKeyGuard(api_key="k-123").verify("k-123")


@pytest.mark.parametrize("provided", [None, "", "k-12", "k-1234", "K-123"])
def test_missing_or_wrong_key_is_unauthorized(provided) -> None:
    with pytest.raises(AuthError):
        ApiKeyGuard(api_key="k-123").verify(provided)


@pytest.mark.parametrize("provided", [None, "anything"])
def test_unconfigured_guard_fails_closed(provided) -> None:
    guard = ApiKeyGuard(api_key=None)

    assert guard.configured is False
    with pytest.raises(ConfigError) as excinfo:
        guard.verify(provided)
    assert excinfo.value.status_code == 500


@pytest.mark.parametrize("raw", ["", "   "])
def test_blank_configured_key_counts_as_missing(raw) -> None:
    settings = AppSettings(api_key=raw)

    assert settings.api_key is None
    assert ApiKeyGuard(api_key=settings.api_key).configured is False
