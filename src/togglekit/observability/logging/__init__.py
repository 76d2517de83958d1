"""Observability – structured logging helpers."""
from togglekit.observability.logging.factory import configure_logging
from togglekit.observability.logging.processors import get_logger

__all__ = ["configure_logging", "get_logger"]
