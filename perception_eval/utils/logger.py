"""Logging utilities."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logger(
    name: str = "perception_eval",
    level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None,
    console: bool = True,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name.
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_dir: Optional directory; messages are also written to
            `<log_dir>/output.log`.
        console: Whether to log to console.
        format_string: Custom format string.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers = []

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir) / "output.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "perception_eval") -> logging.Logger:
    """
    Get a logger below the `perception_eval` hierarchy.

    No handlers are attached here; output appears only once the
    application calls `setup_logger`.
    """
    if name != "perception_eval" and not name.startswith("perception_eval."):
        name = f"perception_eval.{name}"
    return logging.getLogger(name)


class LoggerMixin:
    """Mixin class to add a class-named logger."""

    @property
    def logger(self) -> logging.Logger:
        """Get class-specific logger."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


class ProgressLogger:
    """Log progress for long-running frame loops."""

    def __init__(
        self,
        total: int,
        logger: Optional[logging.Logger] = None,
        description: str = "Processing",
        log_interval: int = 10,
    ):
        """
        Initialize progress logger.

        Args:
            total: Total number of items.
            logger: Logger to use.
            description: Progress description.
            log_interval: Percentage interval for logging.
        """
        self.total = total
        self.logger = logger or get_logger()
        self.description = description
        self.log_interval = log_interval

        self.current = 0
        self.last_logged_pct = -log_interval

    def update(self, n: int = 1) -> None:
        """
        Update progress.

        Args:
            n: Number of items processed.
        """
        self.current += n
        pct = int(100 * self.current / self.total) if self.total else 100

        if pct >= self.last_logged_pct + self.log_interval:
            self.logger.debug(f"{self.description}: {self.current}/{self.total} ({pct}%)")
            self.last_logged_pct = pct

    def __enter__(self):
        self.logger.debug(f"{self.description}: Starting ({self.total} items)")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"{self.description}: Completed")
        else:
            self.logger.error(f"{self.description}: Failed - {exc_val}")
