"""
Logging configuration for StarLesson.

Configures the root logger once from a LoggingConfig and keeps the noisy
server loggers at WARNING.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Dict

from .config import LoggingConfig

QUIET_LOGGERS = ("uvicorn.access", "watchfiles", "httpx")


def configure_logging(config: LoggingConfig) -> None:
    """Configure logging for the application."""
    level = getattr(logging, config.level.upper(), logging.INFO)
    handlers = [logging.StreamHandler()]
    if config.file_path:
        handlers.append(RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        ))

    logging.basicConfig(level=level, format=config.format, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger_levels() -> Dict[str, str]:
    """Get current log levels for the root and starlesson loggers."""
    return {
        "root": logging.getLevelName(logging.getLogger().level),
        "starlesson": logging.getLevelName(logging.getLogger("starlesson").getEffectiveLevel()),
    }
