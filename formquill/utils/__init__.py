"""Utilities."""

from .logger import configure_logging, get_logger, set_log_level

__all__ = ["configure_logging", "get_logger", "set_log_level"]
