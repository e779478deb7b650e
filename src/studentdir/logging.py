"""Logging for studentdir.

Every component logs below the ``studentdir`` logger. A CLI run writes to a
rotating file so log lines never land in the middle of a rendered table;
``--verbose`` mirrors them to stderr.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "studentdir"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "studentdir.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Credentials that can appear in a record store URL or an error body
_SECRETS = (
    (re.compile(r"(https?://)[^/@\s:]+:[^/@\s]+@"), r"\1[REDACTED]@"),
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"(api_key|token)=[a-zA-Z0-9._-]+"), r"\1=[REDACTED]"),
)


def _handlers(
    log_path: Path, max_bytes: int, backup_count: int, console: bool
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    return handlers


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = False,
) -> logging.Logger:
    """Configure the ``studentdir`` logger for one process.

    Safe to call more than once; handlers from an earlier call are closed
    and replaced.

    Args:
        log_dir: Directory for the log file. Falls back to STUDENTDIR_LOG_DIR,
                 then 'logs' under the current directory.
        log_file: Log file name.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: Level name. Falls back to STUDENTDIR_LOG_LEVEL, then INFO.
        console: Also write to stderr.

    Returns:
        The ``studentdir`` logger.
    """
    log_dir = Path(log_dir or os.environ.get("STUDENTDIR_LOG_DIR", DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)
    level = level or os.environ.get("STUDENTDIR_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for old in list(logger.handlers):
        old.close()
        logger.removeHandler(old)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log_path = log_dir / log_file
    for handler in _handlers(log_path, max_bytes, backup_count, console):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("studentdir logging initialized (level=%s, file=%s)", level, log_path)
    return logger


def get_logger(component: str) -> logging.Logger:
    """Logger for a component, e.g. ``get_logger("gateway")`` -> ``studentdir.gateway``."""
    if component != ROOT_LOGGER and not component.startswith(f"{ROOT_LOGGER}."):
        component = f"{ROOT_LOGGER}.{component}"
    return logging.getLogger(component)


def sanitize_for_log(text: str) -> str:
    """Redact URL credentials and tokens before text reaches a log file."""
    for pattern, replacement in _SECRETS:
        text = pattern.sub(replacement, text)
    return text
