"""Shared fixtures for cloud settings tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog


_ENV_VARS = (
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_PROJECT_ID",
    "GOOGLE_CLOUD_ACCESS_TOKEN",
    "GEMINI_REFRESH_TOKEN",
    "GEMINI_OAUTH_CLIENT_ID",
    "GEMINI_OAUTH_CLIENT_SECRET",
    "GEMINI_OAUTH_CREDENTIALS_PATH",
    "CLOUD_SETTINGS_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Clear credential variables and keep any local .env out of reach."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(
        "GEMINI_OAUTH_CREDENTIALS_PATH", str(tmp_path / "missing_creds.json")
    )
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()
