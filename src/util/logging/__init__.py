"""
Logging configuration module using Loguru.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from .helpers import get_logger, log_error_with_context


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages toward Loguru.
    Captures logs from httpx, celery and sentry_sdk, which use standard logging.
    """

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    log_to_file: bool = False,
    log_dir: Optional[Union[str, Path]] = None,
):
    """
    Set up Loguru logging for the application.

    Args:
        log_level: Minimum log level to display
        json_logs: Whether to format logs as JSON
        log_to_file: Whether to also write logs to a rotating file
        log_dir: Directory for the log file, defaults to DATA_DIR/logs
    """
    # Remove default loguru handler
    logger.remove()

    # Intercept standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    handlers: List[Dict[str, Union[str, bool, int]]] = [
        {
            "sink": sys.stderr,
            "level": log_level,
            "colorize": not json_logs,
            "backtrace": True,
            "diagnose": False,
            "format": (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            "serialize": json_logs,
        }
    ]

    if log_to_file:
        if log_dir is None:
            from src.settings import app_settings

            log_dir = Path(app_settings.data_dir) / "logs"
        log_dir = Path(log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            log_dir = Path.home() / ".local" / "share" / "highrise-slack" / "logs"
            log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / "highrise-slack.log"

        handlers.append(
            {
                "sink": str(log_file),
                "level": log_level,
                "rotation": "10 MB",
                "retention": "1 week",
                "compression": "zip",
                "backtrace": True,
                "diagnose": False,
                "format": (
                    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                    "{level: <8} | "
                    "{name}:{function}:{line} | "
                    "{message}"
                ),
                "serialize": json_logs,
            }
        )

    logger.configure(handlers=handlers)

    if log_to_file:
        logger.info(f"Logging to file: {log_file}")

    # Route library loggers through Loguru
    for name in ["sentry_sdk", "celery", "celery.task", "httpx"]:
        logging.getLogger(name).handlers = [InterceptHandler()]

    for name, level in [
        ("httpx", "WARNING"),
        ("httpcore", "WARNING"),
    ]:
        logging.getLogger(name).setLevel(getattr(logging, level))

    return logger


__all__ = [
    "setup_logging",
    "InterceptHandler",
    "get_logger",
    "log_error_with_context",
]
