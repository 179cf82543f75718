"""Protocol interfaces for authorized clients."""

from typing import Protocol, runtime_checkable

from src.features.cloud_settings.models import AuthType, ClientResponse
from src.settings import AppSettings


@runtime_checkable
class AuthorizedClient(Protocol):
    """Protocol for clients that issue authenticated HTTP requests."""

    async def request(self, url: str, method: str = "GET") -> ClientResponse:
        """Send a request and return the decoded response.

        Args:
            url: Absolute URL to request.
            method: HTTP method.

        Returns:
            Response status and decoded body.

        Raises:
            ClientRequestError: If the request fails or returns a non-2xx
                status. ``status_code`` is set when a response was received.
        """
        ...


@runtime_checkable
class AuthorizedClientFactory(Protocol):
    """Protocol for building an authorized client for an auth mode.

    Implementations may perform network calls (token refresh, metadata
    server lookups) and may raise on failure.
    """

    async def get_client(
        self, auth_type: AuthType, config: AppSettings
    ) -> AuthorizedClient:
        """Return a client authorized for ``auth_type``."""
        ...
