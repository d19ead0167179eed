"""
Centralized logging configuration using Loguru.
Follows Single Responsibility Principle - only handles logging setup.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

_configured = False


def _resolve_level(settings) -> str:
    """LOG_LEVEL takes precedence over the DEBUG flag."""
    if settings.log_level:
        log_level = settings.log_level.upper()
        if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            log_level = "INFO"
        return log_level
    return "DEBUG" if settings.debug else "INFO"


def setup_logger():
    """Configure logger handlers. Only configures once even if called multiple times."""
    global _configured
    if _configured:
        return

    from .config import get_settings

    settings = get_settings()
    log_level = _resolve_level(settings)

    logger.remove()

    def filter_reloader_logs(record):
        """Filter out logs from __main__ and __mp_main__ (reloader processes)."""
        return record.get("name", "") not in ("__main__", "__mp_main__")

    logger.add(
        sys.stdout,
        colorize=True,
        format=CONSOLE_FORMAT,
        level=log_level,
        filter=filter_reloader_logs,
    )

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # File logs always DEBUG to capture everything
        logger.add(
            log_dir / "app.log",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format=LOG_FORMAT,
            level="DEBUG",
        )
        logger.add(
            log_dir / "error.log",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format=LOG_FORMAT,
            level="ERROR",
        )

    _configured = True


# Configure logger on module import
setup_logger()

__all__ = ["logger", "setup_logger"]
