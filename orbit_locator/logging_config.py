"""
Logging Configuration

Centralized logging configuration for orbit-locator.
Modules obtain loggers with get_logger(__name__); nothing is configured at
import time, so applications (or the CLI) call configure_logging once.

Usage:
    from orbit_locator.logging_config import configure_logging, get_logger

    configure_logging(level=logging.DEBUG)
    logger = get_logger(__name__)
    logger.info("Satellite located")
"""

import logging
import sys
from typing import Optional, Union

import structlog

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_log_level(level: Union[int, str, None]) -> int:
    """
    Translate a level name or number into a logging level.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def json_formatter() -> logging.Formatter:
    """Formatter rendering stdlib log records as JSON lines via structlog."""
    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    json_logs: bool = False,
) -> None:
    """
    Configure logging for the entire application.

    Parameters
    ----------
    level : int or str
        Logging level (e.g., logging.DEBUG or "DEBUG")
    log_file : str, optional
        Path to log file. If None, logs only to console.
    json_logs : bool
        Emit one JSON object per record instead of plain text.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = json_formatter() if json_logs else logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=parse_log_level(level), handlers=handlers, force=True)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Parameters
    ----------
    name : str
        Name of the logger (typically __name__)

    Returns
    -------
    logging.Logger
        Logger instance
    """
    return logging.getLogger(name)
