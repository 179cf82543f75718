"""Merging of remote settings over local configuration."""

from collections.abc import Mapping
from typing import Any


def merge_settings(
    base: Mapping[str, Any], overrides: Mapping[str, Any]
) -> dict[str, Any]:
    """Recursively merge ``overrides`` over ``base``.

    Nested mappings merge key by key; any other override value (including
    lists) replaces the base value. Neither input is mutated.

    Args:
        base: Local settings.
        overrides: Remote settings that take precedence.

    Returns:
        New merged settings dictionary.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_settings(current, value)
        else:
            merged[key] = value
    return merged
