"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_DEFAULT_CREDENTIALS_PATH = Path.home() / ".gemini" / "oauth_creds.json"


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    google_cloud_project: str | None = Field(
        default=None, validation_alias="GOOGLE_CLOUD_PROJECT"
    )
    google_cloud_project_id: str | None = Field(
        default=None, validation_alias="GOOGLE_CLOUD_PROJECT_ID"
    )
    google_cloud_access_token: str | None = Field(
        default=None, validation_alias="GOOGLE_CLOUD_ACCESS_TOKEN"
    )
    gemini_refresh_token: str | None = Field(
        default=None, validation_alias="GEMINI_REFRESH_TOKEN"
    )
    gemini_oauth_client_id: str | None = Field(
        default=None, validation_alias="GEMINI_OAUTH_CLIENT_ID"
    )
    gemini_oauth_client_secret: str | None = Field(
        default=None, validation_alias="GEMINI_OAUTH_CLIENT_SECRET"
    )
    gemini_oauth_credentials_path: Path = Field(
        default=_DEFAULT_CREDENTIALS_PATH,
        validation_alias="GEMINI_OAUTH_CREDENTIALS_PATH",
    )
    cloud_settings_timeout: float = Field(
        default=15.0, gt=0, validation_alias="CLOUD_SETTINGS_TIMEOUT_SECONDS"
    )

    def project_id(self) -> str | None:
        """Return the first non-empty cloud project identifier."""
        return self.google_cloud_project or self.google_cloud_project_id or None


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
