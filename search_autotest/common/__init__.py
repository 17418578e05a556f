"""
================================================================================
Common Utilities
================================================================================

Shared logging setup for the harness and its runner.

Exports:
    - init_logger: Initialize the loguru logger with standard settings
    - ensure_directory: Create a directory if it does not exist

Usage:
    from search_autotest.common import init_logger

    init_logger(level="DEBUG", log_file="logs/ui_tests.log")

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path to write logs to
        format_string: Log format string. Uses default if not provided.
        rotation: File rotation threshold
        retention: How long rotated files are kept
        force: Reconfigure even if already initialized

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/ui_tests.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    # Remove default handler
    logger.remove()

    format_string = format_string or DEFAULT_FORMAT

    # Add console handler
    logger.add(
        sys.stderr,
        format=format_string,
        level=level.upper(),
        colorize=True,
    )

    # Add file handler if specified
    if log_file:
        ensure_directory(os.path.dirname(log_file))
        logger.add(
            log_file,
            format=format_string,
            level=level.upper(),
            rotation=rotation,
            retention=retention,
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path (empty string is a no-op)

    Returns:
        The path (for chaining)
    """
    if path:
        os.makedirs(path, exist_ok=True)
    return path


__all__ = [
    "init_logger",
    "ensure_directory",
]
