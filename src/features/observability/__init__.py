"""Observability module for logging."""

from src.features.observability.logging import configure_logging


__all__ = ["configure_logging"]
