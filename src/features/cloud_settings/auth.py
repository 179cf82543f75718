"""Google OAuth token acquisition for Cloud Storage requests."""

import json
import time
from dataclasses import dataclass
from http import HTTPStatus
from pathlib import Path

import httpx
import structlog

from src.features.cloud_settings.constants import (
    COMPONENT_CLOUD_SETTINGS,
    DEFAULT_TIMEOUT_SECONDS,
    METADATA_FLAVOR_HEADER,
    METADATA_TOKEN_ENDPOINT,
    TOKEN_ENDPOINT,
)
from src.features.cloud_settings.errors import CloudSettingsAuthError


logger = structlog.get_logger()

# Treat tokens this close to expiry as already expired
_EXPIRY_SKEW_MS = 60_000


@dataclass(frozen=True)
class CachedCredentials:
    """OAuth credentials cached on disk by a previous interactive login.

    Attributes:
        access_token: Last issued access token, if any.
        refresh_token: Long-lived refresh token, if any.
        expiry_date: Access token expiry in epoch milliseconds.
    """

    access_token: str | None = None
    refresh_token: str | None = None
    expiry_date: int | None = None

    def has_valid_access_token(self, now_ms: int | None = None) -> bool:
        """Check if the cached access token can still be used."""
        if not self.access_token or self.expiry_date is None:
            return False
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return self.expiry_date - _EXPIRY_SKEW_MS > now_ms


def load_cached_credentials(path: Path) -> CachedCredentials | None:
    """Read cached OAuth credentials from ``path``.

    Args:
        path: Location of the cached credentials JSON file.

    Returns:
        Parsed credentials, or None if the file does not exist.

    Raises:
        CloudSettingsAuthError: If the file cannot be read or is not a JSON
            object.
    """
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        msg = f"Failed to read cached credentials from {path}: {exc}"
        raise CloudSettingsAuthError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Cached credentials in {path} must be a JSON object"
        raise CloudSettingsAuthError(msg)

    expiry = data.get("expiry_date")
    return CachedCredentials(
        access_token=data.get("access_token") or None,
        refresh_token=data.get("refresh_token") or None,
        expiry_date=int(expiry) if isinstance(expiry, int | float) else None,
    )


async def refresh_access_token(
    refresh_token: str,
    client_id: str | None = None,
    client_secret: str | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Exchange a refresh token for a new Google OAuth access token.

    Args:
        refresh_token: Long-lived refresh token from a previous login.
        client_id: OAuth client ID.
        client_secret: OAuth client secret.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).

    Returns:
        Fresh access token string.

    Raises:
        CloudSettingsAuthError: If the token refresh request fails.
    """
    log = logger.bind(component=COMPONENT_CLOUD_SETTINGS, subcomponent="auth")

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(
                TOKEN_ENDPOINT,
                data={
                    "client_id": client_id or "",
                    "client_secret": client_secret or "",
                    "refresh_token": refresh_token,
                    "grant_type": "refresh_token",
                },
            )
    except httpx.HTTPError as exc:
        log.debug("oauth_token_refresh_network_error", error=str(exc))
        msg = f"Network error during token refresh: {exc}"
        raise CloudSettingsAuthError(msg) from exc

    if response.status_code != HTTPStatus.OK:
        log.debug("oauth_token_refresh_failed", status_code=response.status_code)
        msg = f"Token refresh failed with status {response.status_code}"
        raise CloudSettingsAuthError(msg)

    access_token = _extract_access_token(response)
    log.debug("oauth_token_refreshed")
    return access_token


async def fetch_metadata_access_token(
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Fetch an access token for the default service account.

    Used on Cloud Shell and Compute Engine, where the metadata server issues
    tokens for the attached identity.

    Raises:
        CloudSettingsAuthError: If the metadata server is unreachable or
            does not return a token.
    """
    log = logger.bind(component=COMPONENT_CLOUD_SETTINGS, subcomponent="auth")

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(
                METADATA_TOKEN_ENDPOINT, headers=METADATA_FLAVOR_HEADER
            )
    except httpx.HTTPError as exc:
        log.debug("metadata_token_network_error", error=str(exc))
        msg = f"Metadata server unreachable: {exc}"
        raise CloudSettingsAuthError(msg) from exc

    if response.status_code != HTTPStatus.OK:
        log.debug("metadata_token_failed", status_code=response.status_code)
        msg = f"Metadata token request failed with status {response.status_code}"
        raise CloudSettingsAuthError(msg)

    access_token = _extract_access_token(response)
    log.debug("metadata_token_fetched")
    return access_token


def _extract_access_token(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError as exc:
        msg = f"Token response is not valid JSON: {exc}"
        raise CloudSettingsAuthError(msg) from exc

    access_token = data.get("access_token") if isinstance(data, dict) else None
    if not access_token:
        msg = "No access_token in token response"
        raise CloudSettingsAuthError(msg)
    return str(access_token)
