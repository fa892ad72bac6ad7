"""
================================================================================
uiready Common Utilities
================================================================================

Logging setup shared by the framework, the test suites and the runner.

Exports:
    - init_logger: Configure loguru with the project's standard sinks

Usage:
    from uiready.common import init_logger

    init_logger()
    init_logger(level="DEBUG", log_file="logs/ui.log")

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger

from uiready.framework.config import ConfigLoader

# ============================================================
# Logging Setup
# ============================================================

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Only the first call has an effect.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = ConfigLoader()

    # Remove default handler
    logger.remove()

    level = level or config.get("logging.level", "INFO")
    format_string = format_string or config.get("logging.format", DEFAULT_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or config.get("logging.file")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


__all__ = [
    "init_logger",
]
