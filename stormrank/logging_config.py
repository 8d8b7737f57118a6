"""
Logging configuration
=====================

One console handler plus an optional rotating log file, attached to the
package logger. Modules log through `logging.getLogger(__name__)` and inherit
these handlers.

Usage:
    from stormrank.logging_config import setup_logger
    logger = setup_logger(log_dir="logs")
    logger.info("Loading dataset...")
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "stormrank"

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation settings: 5 MB per file, 3 backups
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3
LOG_FILE = "stormrank.log"


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int = logging.DEBUG,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Create and configure a logger with console (+ file) handlers.

    Args:
        name: Logger name (default: the package logger)
        level: Logging level (default DEBUG)
        log_dir: Directory for the rotating log file; no file when None

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Console handler (INFO and above), added once; stderr keeps stdout for the tables
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler, one per log directory
    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = str((log_path / LOG_FILE).resolve())
        if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == log_file for h in logger.handlers):
            file_handler = RotatingFileHandler(
                log_file, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
