#!/usr/bin/env python3
"""
Logging setup for Clone Git Repo.
"""

import logging
import logging.handlers
from datetime import date
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'clone_git_repo'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_BACKUP_COUNT = 5


def log_file_path(log_dir: str, day: Optional[date] = None) -> Path:
    """Path of the log file for the given day (today by default)."""
    day = day or date.today()
    return Path(log_dir) / f"clone-git-repo-{day.isoformat()}.log"


def setup_logging(log_dir: Optional[str] = None, max_size: int = 10 * 1024 * 1024,
                  verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the package logger with a console handler and a rotating log file.

    Args:
        log_dir: Directory for the log file; no file is written if None
        max_size: Size in bytes at which the log file is rotated
        verbose: Log DEBUG messages, including transfer progress
        quiet: Show only WARNING and ERROR messages on the console

    Returns:
        The configured package logger

    Raises:
        OSError: If the log directory or file cannot be created
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    # In quiet mode, only show WARNING and ERROR level logs on the console
    console_handler = logging.StreamHandler()
    if quiet:
        console_handler.setLevel(logging.WARNING)
    else:
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        path = log_file_path(log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_size, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
