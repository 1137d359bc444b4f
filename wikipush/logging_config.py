#!/usr/bin/env python3
"""
Logging configuration for wikipush.

Logs to the console and, when a log directory is given, to a rotating file.

Usage:
    from wikipush.logging_config import setup_logging

    logger = setup_logging(
        name="wikipush",
        log_dir="/var/log",  # Optional, console only when omitted
    )
    logger.info("Starting upload...")
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str = "wikipush",
    log_dir: Optional[str] = None,
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    console: bool = True,
) -> logging.Logger:
    """
    Set up logging to console and, optionally, to a file.

    Args:
        name: Logger name (also used as the log filename)
        log_dir: Directory for the log file (None disables file logging)
        level: Logging level (default: INFO)
        max_bytes: Max log file size before rotation
        backup_count: Number of rotated log files to keep
        console: Whether to log to the console

    Returns:
        Configured logger instance

    The log file is named {name}.log (e.g., wikipush.log).
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear any existing handlers (for re-initialization)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    log_file = None
    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / f"{name}.log"

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        logger.debug(f"Logging initialized: {log_file}")
    return logger


def get_log_dir(default: Optional[str] = None) -> Optional[Path]:
    """
    Get the log directory from environment or default.

    Checks LOG_DIR environment variable first. Returns None when neither is set.
    """
    value = os.environ.get("LOG_DIR", default)
    return Path(value) if value else None
