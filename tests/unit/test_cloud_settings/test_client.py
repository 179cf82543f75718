"""Unit tests for the authorized HTTP client."""

import httpx
import pytest

from src.features.cloud_settings.client import AuthorizedHttpClient
from src.features.cloud_settings.errors import ClientRequestError
from src.features.cloud_settings.protocols import AuthorizedClient


_URL = (
    "https://storage.googleapis.com/storage/v1/b/"
    "p-gemini-cli-settings/o/settings.json?alt=media"
)


def _make_client(transport: httpx.MockTransport) -> AuthorizedHttpClient:
    return AuthorizedHttpClient("ya29.test-token", timeout=5.0, transport=transport)


class TestRequest:
    """Tests for AuthorizedHttpClient.request."""

    def test_implements_protocol(self) -> None:
        """Should satisfy the AuthorizedClient protocol."""
        assert isinstance(AuthorizedHttpClient("tok"), AuthorizedClient)

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self) -> None:
        """Should send the access token as a bearer header."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"a": 1})

        await _make_client(httpx.MockTransport(handler)).request(_URL)

        assert seen[0].method == "GET"
        assert seen[0].headers["Authorization"] == "Bearer ya29.test-token"
        assert str(seen[0].url) == _URL

    @pytest.mark.asyncio
    async def test_json_body_decoded(self) -> None:
        """Should decode a JSON body."""
        transport = httpx.MockTransport(
            lambda _: httpx.Response(200, json={"a": 1, "nested": {"b": [1, 2]}})
        )

        response = await _make_client(transport).request(_URL)

        assert response.status_code == 200
        assert response.data == {"a": 1, "nested": {"b": [1, 2]}}

    @pytest.mark.asyncio
    async def test_non_json_body_returned_as_text(self) -> None:
        """Should return text when the body is not JSON."""
        transport = httpx.MockTransport(
            lambda _: httpx.Response(200, text="not json {")
        )

        response = await _make_client(transport).request(_URL)

        assert response.data == "not json {"

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self) -> None:
        """Should return None for an empty body."""
        transport = httpx.MockTransport(lambda _: httpx.Response(200))

        response = await _make_client(transport).request(_URL)

        assert response.data is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403, 404, 500, 503])
    async def test_error_status_raises_with_code(self, status_code: int) -> None:
        """Should raise ClientRequestError carrying the status code."""
        transport = httpx.MockTransport(lambda _: httpx.Response(status_code))

        with pytest.raises(ClientRequestError) as exc_info:
            await _make_client(transport).request(_URL)

        assert exc_info.value.status_code == status_code

    @pytest.mark.asyncio
    async def test_network_error_raises_without_code(self) -> None:
        """Should wrap transport failures with no status code."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "Connection refused"
            raise httpx.ConnectError(msg, request=request)

        with pytest.raises(ClientRequestError, match="request failed") as exc_info:
            await _make_client(httpx.MockTransport(handler)).request(_URL)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
