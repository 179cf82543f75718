"""Domain-specific error types for the cloud settings module."""


class CloudSettingsError(Exception):
    """Base class for cloud settings failures."""


class CloudSettingsAuthError(CloudSettingsError):
    """OAuth credentials could not be obtained."""


class ClientRequestError(CloudSettingsError):
    """Authorized request failure.

    Attributes:
        status_code: HTTP status code from the response, or None when the
            request never produced one (connection errors, timeouts).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
