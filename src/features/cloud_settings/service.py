"""Remote settings fetch from a per-project Cloud Storage bucket."""

from collections.abc import Callable
from http import HTTPStatus

import httpx
import structlog

from src.features.cloud_settings.constants import (
    ABSENT_STATUS_CODES,
    BUCKET_SUFFIX,
    COMPONENT_CLOUD_SETTINGS,
    INVALID_PAYLOAD_MESSAGE,
    SETTINGS_FILE_NAME,
    STORAGE_MEDIA_URL_TEMPLATE,
)
from src.features.cloud_settings.errors import ClientRequestError
from src.features.cloud_settings.factory import OAuthClientFactory
from src.features.cloud_settings.identifier import resolve_project_id
from src.features.cloud_settings.models import (
    AuthType,
    CloudSettings,
    FetchOutcome,
    SkipReason,
)
from src.features.cloud_settings.protocols import AuthorizedClientFactory
from src.settings import AppSettings


logger = structlog.get_logger()


def build_settings_url(project_id: str) -> str:
    """Build the Cloud Storage media download URL for a project's settings.

    Args:
        project_id: Cloud project identifier.

    Returns:
        URL of ``settings.json`` in the ``{project_id}-gemini-cli-settings``
        bucket.
    """
    return STORAGE_MEDIA_URL_TEMPLATE.format(
        bucket=f"{project_id}{BUCKET_SUFFIX}",
        file=SETTINGS_FILE_NAME,
    )


class CloudSettingsService:
    """Fetches the optional remote settings document for a cloud project.

    The fetch is opt-in: without a project identifier in the environment
    no request is made. Every failure is logged and reported as "no
    settings", so callers always fall back to local configuration.

    One instance is created at startup and passed to whatever merges
    configuration; the service keeps no state between calls.
    """

    def __init__(
        self,
        client_factory: AuthorizedClientFactory,
        project_id_resolver: Callable[[], str | None] = resolve_project_id,
    ) -> None:
        """Initialize the service.

        Args:
            client_factory: Builds an authorized client for an auth mode.
            project_id_resolver: Returns the project identifier, or None.
        """
        self._client_factory = client_factory
        self._resolve_project_id = project_id_resolver

    async def load_settings(
        self, config: AppSettings, auth_type: AuthType
    ) -> CloudSettings | None:
        """Load the remote settings document.

        Never raises.

        Args:
            config: Application settings passed to the client factory.
            auth_type: Authentication mode for the request.

        Returns:
            The settings mapping, or None when unavailable for any reason.
        """
        outcome = await self.fetch(config, auth_type)
        return outcome.settings

    async def fetch(self, config: AppSettings, auth_type: AuthType) -> FetchOutcome:
        """Fetch the remote settings document and classify the result.

        Args:
            config: Application settings passed to the client factory.
            auth_type: Authentication mode for the request.

        Returns:
            FetchOutcome describing what happened. Never raises.
        """
        log = logger.bind(
            component=COMPONENT_CLOUD_SETTINGS,
            subcomponent="service",
            auth_type=getattr(auth_type, "value", str(auth_type)),
        )
        try:
            return await self._fetch(config, auth_type, log)
        except Exception as exc:  # noqa: BLE001
            log.debug(
                "cloud_settings_load_error",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return FetchOutcome.failed(SkipReason.UNEXPECTED_ERROR, error=str(exc))

    async def _fetch(
        self,
        config: AppSettings,
        auth_type: AuthType,
        log: structlog.stdlib.BoundLogger,
    ) -> FetchOutcome:
        project_id = self._resolve_project_id()
        if not project_id:
            log.debug("cloud_settings_skipped", reason="no_project_id")
            return FetchOutcome.absent(SkipReason.NO_PROJECT_ID)

        url = build_settings_url(project_id)
        log = log.bind(project_id=project_id, url=url)
        log.debug("cloud_settings_fetch_started")

        client = await self._client_factory.get_client(auth_type, config)
        try:
            response = await client.request(url, method="GET")
        except ClientRequestError as exc:
            if exc.status_code in ABSENT_STATUS_CODES:
                log.debug(
                    "cloud_settings_skipped",
                    reason="not_found_or_denied",
                    status_code=exc.status_code,
                )
                return FetchOutcome.absent(
                    SkipReason.NOT_FOUND_OR_DENIED, status_code=exc.status_code
                )
            raise

        if response.status_code != HTTPStatus.OK:
            log.debug(
                "cloud_settings_skipped",
                reason="non_ok_status",
                status_code=response.status_code,
            )
            return FetchOutcome.absent(
                SkipReason.NON_OK_STATUS, status_code=response.status_code
            )

        data = response.data
        if not isinstance(data, dict):
            log.error(
                "cloud_settings_invalid_payload",
                message=INVALID_PAYLOAD_MESSAGE,
                payload_type=type(data).__name__,
            )
            return FetchOutcome.failed(
                SkipReason.INVALID_PAYLOAD, error=INVALID_PAYLOAD_MESSAGE
            )

        log.debug("cloud_settings_loaded", keys=len(data))
        return FetchOutcome.found(data)


def create_cloud_settings_service(
    transport: httpx.AsyncBaseTransport | None = None,
) -> CloudSettingsService:
    """Create the service backed by the OAuth client factory.

    Call once at startup and pass the instance to consumers.

    Args:
        transport: Optional httpx transport for all outgoing requests.

    Returns:
        A ready CloudSettingsService.
    """
    return CloudSettingsService(OAuthClientFactory(transport=transport))
