"""Logging configuration for persistent-settings.

Provides centralized logging setup with file and console handlers.
The library itself never installs handlers; applications call
:func:`setup_logging` once at startup if they want framework output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "persistent_settings"


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Configure logging for the settings framework.

    Sets up logging to a file (if given) and to the console (if debug mode).

    Args:
        debug: If True, also log to console at DEBUG level
        log_file: Optional path of a log file; its directory is created

    Returns:
        The root logger for the framework
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    logger.handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # Console handler - only in debug mode
    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            "%(levelname)s - %(name)s - %(message)s"
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: Module name (e.g., 'ini_file', 'session')

    Returns:
        A logger instance for the module
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
