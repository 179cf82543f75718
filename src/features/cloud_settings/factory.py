"""Factory for creating authorized clients for each auth mode."""

import httpx
import structlog

from src.features.cloud_settings.auth import (
    fetch_metadata_access_token,
    load_cached_credentials,
    refresh_access_token,
)
from src.features.cloud_settings.client import AuthorizedHttpClient
from src.features.cloud_settings.constants import COMPONENT_CLOUD_SETTINGS
from src.features.cloud_settings.errors import CloudSettingsAuthError
from src.features.cloud_settings.models import AuthType
from src.settings import AppSettings


logger = structlog.get_logger()

_METADATA_AUTH_TYPES = frozenset({AuthType.CLOUD_SHELL, AuthType.COMPUTE_ADC})


class OAuthClientFactory:
    """Builds ``AuthorizedHttpClient`` instances from configured credentials.

    A token is obtained on every call; nothing is cached between calls.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize the factory.

        Args:
            transport: Optional httpx transport shared by token requests and
                the clients built here (used by tests).
        """
        self._transport = transport

    async def get_client(
        self, auth_type: AuthType, config: AppSettings
    ) -> AuthorizedHttpClient:
        """Create a client authorized for ``auth_type``.

        Priority for Google login: explicit access token > refresh token >
        cached credentials file.

        Args:
            auth_type: Selected authentication mode.
            config: Application settings holding credentials.

        Returns:
            An authorized client ready for use.

        Raises:
            CloudSettingsAuthError: If the auth mode has no OAuth client or
                no usable credentials are configured.
        """
        log = logger.bind(component=COMPONENT_CLOUD_SETTINGS, subcomponent="factory")

        if auth_type is AuthType.LOGIN_WITH_GOOGLE:
            access_token = await self._personal_access_token(config, log)
        elif auth_type in _METADATA_AUTH_TYPES:
            access_token = await fetch_metadata_access_token(
                timeout=config.cloud_settings_timeout, transport=self._transport
            )
            log.debug("authorized_client_created", auth_method="metadata")
        else:
            msg = f"Auth type {auth_type.value} does not provide an OAuth client"
            raise CloudSettingsAuthError(msg)

        return AuthorizedHttpClient(
            access_token,
            timeout=config.cloud_settings_timeout,
            transport=self._transport,
        )

    async def _personal_access_token(
        self, config: AppSettings, log: structlog.stdlib.BoundLogger
    ) -> str:
        if config.google_cloud_access_token:
            log.debug("authorized_client_created", auth_method="access_token")
            return config.google_cloud_access_token

        if config.gemini_refresh_token:
            log.debug("authorized_client_created", auth_method="refresh_token")
            return await self._refresh(config.gemini_refresh_token, config)

        cached = load_cached_credentials(config.gemini_oauth_credentials_path)
        if cached is not None:
            if cached.has_valid_access_token() and cached.access_token:
                log.debug("authorized_client_created", auth_method="cached_token")
                return cached.access_token
            if cached.refresh_token:
                log.debug("authorized_client_created", auth_method="cached_refresh")
                return await self._refresh(cached.refresh_token, config)

        msg = (
            "No Google OAuth credentials available "
            "(need GOOGLE_CLOUD_ACCESS_TOKEN, GEMINI_REFRESH_TOKEN "
            "or cached login credentials)"
        )
        raise CloudSettingsAuthError(msg)

    async def _refresh(self, refresh_token: str, config: AppSettings) -> str:
        return await refresh_access_token(
            refresh_token,
            client_id=config.gemini_oauth_client_id,
            client_secret=config.gemini_oauth_client_secret,
            timeout=config.cloud_settings_timeout,
            transport=self._transport,
        )
