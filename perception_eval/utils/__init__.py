"""Utility modules."""

from .config_loader import ConfigLoader, get_nested
from .logger import LoggerMixin, ProgressLogger, get_logger, setup_logger

__all__ = [
    "ConfigLoader",
    "get_nested",
    "LoggerMixin",
    "ProgressLogger",
    "get_logger",
    "setup_logger",
]
