"""CLI commands for fetching remote cloud settings."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click
import structlog

from src.features.cloud_settings import (
    AuthType,
    create_cloud_settings_service,
    merge_settings,
)
from src.features.observability.logging import configure_logging
from src.settings import get_settings


logger = structlog.get_logger()


def _load_local_settings(path: Path) -> dict[str, Any]:
    """Read a local settings file that the remote document is merged over.

    Raises:
        click.BadParameter: If the file is not a JSON object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        msg = f"{path} is not valid JSON: {exc}"
        raise click.BadParameter(msg, param_hint="--local") from exc

    if not isinstance(data, dict):
        msg = f"{path} must contain a JSON object"
        raise click.BadParameter(msg, param_hint="--local")
    return data


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Remote cloud settings CLI."""


@cli.command()
@click.option(
    "--auth-type",
    "auth_type",
    type=click.Choice([auth.value for auth in AuthType]),
    default=AuthType.LOGIN_WITH_GOOGLE.value,
    show_default=True,
    help="Authentication mode used to build the OAuth client.",
)
@click.option(
    "--local",
    "local_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Local settings.json to merge the remote settings over.",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def fetch(
    auth_type: str,
    local_path: Path | None,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Fetch remote settings for the configured cloud project.

    Prints the remote settings document as JSON, or null when none is
    available. With --local, prints the local file with the remote
    settings merged over it.
    """
    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        json_format=json_logs,
    )
    log = logger.bind(component="cli", command="fetch")

    local = _load_local_settings(local_path) if local_path else None

    settings = get_settings()
    service = create_cloud_settings_service()
    remote = asyncio.run(service.load_settings(settings, AuthType(auth_type)))
    log.info("cloud_settings_fetch_finished", found=remote is not None)

    result: dict[str, Any] | None = remote
    if local is not None:
        result = merge_settings(local, remote or {})

    click.echo(json.dumps(result, indent=2, sort_keys=True))


if __name__ == "__main__":
    cli()
