"""Remote settings fetched from a per-project Cloud Storage bucket.

This module provides an opt-in fetch of a user-scoped ``settings.json``:
- Project identifier resolution from the environment
- OAuth-authorized Cloud Storage media download
- Classification of absence, bad payloads and unexpected failures
- Merging of the fetched document over local settings
"""

from src.features.cloud_settings.client import AuthorizedHttpClient
from src.features.cloud_settings.errors import (
    ClientRequestError,
    CloudSettingsAuthError,
    CloudSettingsError,
)
from src.features.cloud_settings.factory import OAuthClientFactory
from src.features.cloud_settings.identifier import resolve_project_id
from src.features.cloud_settings.merge import merge_settings
from src.features.cloud_settings.models import (
    AuthType,
    ClientResponse,
    CloudSettings,
    FetchOutcome,
    FetchStatus,
    SkipReason,
)
from src.features.cloud_settings.protocols import (
    AuthorizedClient,
    AuthorizedClientFactory,
)
from src.features.cloud_settings.service import (
    CloudSettingsService,
    build_settings_url,
    create_cloud_settings_service,
)


__all__ = [
    # Service
    "CloudSettingsService",
    "build_settings_url",
    "create_cloud_settings_service",
    # Clients
    "AuthorizedClient",
    "AuthorizedClientFactory",
    "AuthorizedHttpClient",
    "OAuthClientFactory",
    # Models
    "AuthType",
    "ClientResponse",
    "CloudSettings",
    "FetchOutcome",
    "FetchStatus",
    "SkipReason",
    # Errors
    "ClientRequestError",
    "CloudSettingsAuthError",
    "CloudSettingsError",
    # Helpers
    "merge_settings",
    "resolve_project_id",
]
