"""Data models for the cloud settings feature."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


CloudSettings = dict[str, Any]


class AuthType(str, Enum):
    """Authentication modes a caller may select.

    Only the Google login and the compute-backed modes yield an OAuth
    client; key-based modes cannot read from Cloud Storage.
    """

    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"
    COMPUTE_ADC = "compute-default-credentials"


class FetchStatus(str, Enum):
    """Terminal state of a single fetch."""

    FOUND = "FOUND"
    ABSENT = "ABSENT"
    ERROR = "ERROR"


class SkipReason(str, Enum):
    """Why a fetch did not produce a settings document.

    - NO_PROJECT_ID: No project identifier in the environment
    - NOT_FOUND_OR_DENIED: Request failed with 403 or 404
    - NON_OK_STATUS: Response status was not 200
    - INVALID_PAYLOAD: Body was missing or not a JSON object
    - UNEXPECTED_ERROR: Anything else (network, auth, programming error)
    """

    NO_PROJECT_ID = "NO_PROJECT_ID"
    NOT_FOUND_OR_DENIED = "NOT_FOUND_OR_DENIED"
    NON_OK_STATUS = "NON_OK_STATUS"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


@dataclass(frozen=True)
class ClientResponse:
    """Response returned by an authorized client.

    Attributes:
        status_code: HTTP status code.
        data: Decoded response body (JSON value, text, or None).
    """

    status_code: int
    data: Any = None


@dataclass(frozen=True)
class FetchOutcome:
    """Tagged result of a cloud settings fetch."""

    status: FetchStatus
    settings: CloudSettings | None = None
    reason: SkipReason | None = None
    status_code: int | None = None
    error: str | None = None

    @classmethod
    def found(cls, settings: CloudSettings) -> "FetchOutcome":
        """Build a successful outcome carrying the settings document."""
        return cls(status=FetchStatus.FOUND, settings=settings)

    @classmethod
    def absent(
        cls, reason: SkipReason, status_code: int | None = None
    ) -> "FetchOutcome":
        """Build an outcome for an expected absence."""
        return cls(status=FetchStatus.ABSENT, reason=reason, status_code=status_code)

    @classmethod
    def failed(cls, reason: SkipReason, error: str | None = None) -> "FetchOutcome":
        """Build an outcome for a failure that was logged and contained."""
        return cls(status=FetchStatus.ERROR, reason=reason, error=error)

    @property
    def is_found(self) -> bool:
        """Check if a settings document was fetched."""
        return self.status is FetchStatus.FOUND
