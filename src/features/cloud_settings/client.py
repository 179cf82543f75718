"""Authorized HTTP client for Google Cloud APIs."""

from typing import Any

import httpx
import structlog

from src.features.cloud_settings.constants import (
    COMPONENT_CLOUD_SETTINGS,
    DEFAULT_TIMEOUT_SECONDS,
)
from src.features.cloud_settings.errors import ClientRequestError
from src.features.cloud_settings.models import ClientResponse


logger = structlog.get_logger()


class AuthorizedHttpClient:
    """Async HTTP client that sends a bearer token with every request.

    Non-2xx responses are raised as ``ClientRequestError`` carrying the
    status code, so callers can branch on ``status_code`` without parsing
    messages.
    """

    def __init__(
        self,
        access_token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: Google OAuth access token.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport

    async def request(self, url: str, method: str = "GET") -> ClientResponse:
        """Send an authorized request.

        Args:
            url: Absolute URL to request.
            method: HTTP method.

        Returns:
            Response status and decoded body.

        Raises:
            ClientRequestError: On network errors or non-2xx responses.
        """
        log = logger.bind(
            component=COMPONENT_CLOUD_SETTINGS, subcomponent="client", method=method
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers={"Authorization": f"Bearer {self._access_token}"},
                )
        except httpx.HTTPError as exc:
            log.debug("authorized_request_network_error", error=str(exc))
            msg = f"{method} request failed: {exc}"
            raise ClientRequestError(msg) from exc

        if not response.is_success:
            msg = f"{method} request returned {response.status_code}"
            raise ClientRequestError(msg, status_code=response.status_code)

        return ClientResponse(
            status_code=response.status_code, data=_decode_body(response)
        )


def _decode_body(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to text for non-JSON content."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
