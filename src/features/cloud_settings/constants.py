"""Constants for the cloud settings feature.

Centralizes storage naming conventions, OAuth endpoints and status codes
used when fetching the remote settings document.
"""

from http import HTTPStatus


COMPONENT_CLOUD_SETTINGS = "cloud_settings"

# Storage naming
BUCKET_SUFFIX = "-gemini-cli-settings"
SETTINGS_FILE_NAME = "settings.json"
STORAGE_MEDIA_URL_TEMPLATE = (
    "https://storage.googleapis.com/storage/v1/b/{bucket}/o/{file}?alt=media"
)

# OAuth endpoints
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"  # noqa: S105
METADATA_TOKEN_ENDPOINT = (
    "http://metadata.google.internal/computeMetadata/v1/"
    "instance/service-accounts/default/token"
)
METADATA_FLAVOR_HEADER = {"Metadata-Flavor": "Google"}

# Request failures that mean the feature is not provisioned for this project
ABSENT_STATUS_CODES = frozenset({HTTPStatus.FORBIDDEN, HTTPStatus.NOT_FOUND})

DEFAULT_TIMEOUT_SECONDS = 15.0

INVALID_PAYLOAD_MESSAGE = (
    "Cloud Settings: Failed to parse settings.json. "
    "The file must be a valid JSON object."
)
