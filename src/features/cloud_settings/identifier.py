"""Project identifier resolution from the environment."""

from src.settings import AppSettings


def resolve_project_id(settings: AppSettings | None = None) -> str | None:
    """Return the cloud project identifier, if one is configured.

    ``GOOGLE_CLOUD_PROJECT`` wins over ``GOOGLE_CLOUD_PROJECT_ID``; empty
    values count as unset. The environment is read on every call.

    Args:
        settings: Pre-loaded settings. Loaded from the environment when None.

    Returns:
        Project identifier, or None when neither variable is set.
    """
    if settings is None:
        settings = AppSettings()
    return settings.project_id()
