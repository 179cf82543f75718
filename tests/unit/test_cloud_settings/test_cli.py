"""Unit tests for the cloud settings CLI."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner
from structlog.testing import capture_logs

from src.cli.cloud_settings import cli
from src.features.cloud_settings.models import AuthType


@pytest.fixture
def mock_service() -> Iterator[MagicMock]:
    """Patch the service factory and logging setup used by the CLI."""
    service = MagicMock()
    service.load_settings = AsyncMock(return_value=None)
    with (
        patch("src.cli.cloud_settings.configure_logging"),
        patch(
            "src.cli.cloud_settings.create_cloud_settings_service",
            return_value=service,
        ),
    ):
        yield service


def _invoke(*args: str) -> tuple[int, str]:
    with capture_logs():
        result = CliRunner().invoke(cli, ["fetch", *args])
    return result.exit_code, result.output


class TestFetchCommand:
    """Tests for the fetch command."""

    def test_prints_remote_settings(self, mock_service: MagicMock) -> None:
        """Should print the fetched document as JSON."""
        mock_service.load_settings.return_value = {"theme": "dark"}

        exit_code, output = _invoke()

        assert exit_code == 0
        assert json.loads(output) == {"theme": "dark"}

    def test_prints_null_when_absent(self, mock_service: MagicMock) -> None:
        """Should print null and succeed when nothing was fetched."""
        exit_code, output = _invoke()

        assert exit_code == 0
        assert json.loads(output) is None

    def test_default_auth_type(self, mock_service: MagicMock) -> None:
        """Should default to Google login."""
        _invoke()

        auth_type = mock_service.load_settings.await_args.args[1]
        assert auth_type is AuthType.LOGIN_WITH_GOOGLE

    def test_auth_type_option(self, mock_service: MagicMock) -> None:
        """Should pass the selected auth mode to the service."""
        _invoke("--auth-type", "compute-default-credentials")

        auth_type = mock_service.load_settings.await_args.args[1]
        assert auth_type is AuthType.COMPUTE_ADC

    def test_invalid_auth_type_rejected(self, mock_service: MagicMock) -> None:
        """Should reject unknown auth modes."""
        exit_code, _ = _invoke("--auth-type", "password")

        assert exit_code == 2
        mock_service.load_settings.assert_not_awaited()

    def test_merges_over_local_file(
        self, mock_service: MagicMock, tmp_path: Path
    ) -> None:
        """Should merge the remote document over the local settings."""
        local = tmp_path / "settings.json"
        local.write_text(json.dumps({"ui": {"theme": "light", "tips": True}}))
        mock_service.load_settings.return_value = {"ui": {"theme": "dark"}}

        exit_code, output = _invoke("--local", str(local))

        assert exit_code == 0
        assert json.loads(output) == {"ui": {"theme": "dark", "tips": True}}

    def test_local_file_kept_when_remote_absent(
        self, mock_service: MagicMock, tmp_path: Path
    ) -> None:
        """Should print the local settings unchanged when nothing was fetched."""
        local = tmp_path / "settings.json"
        local.write_text(json.dumps({"a": 1}))

        exit_code, output = _invoke("--local", str(local))

        assert exit_code == 0
        assert json.loads(output) == {"a": 1}

    def test_local_file_must_be_object(
        self, mock_service: MagicMock, tmp_path: Path
    ) -> None:
        """Should fail with a usage error for a non-object local file."""
        local = tmp_path / "settings.json"
        local.write_text("[1, 2]")

        exit_code, output = _invoke("--local", str(local))

        assert exit_code == 2
        assert "must contain a JSON object" in output
        mock_service.load_settings.assert_not_awaited()
