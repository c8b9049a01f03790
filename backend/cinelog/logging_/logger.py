import logging
import os
import sys
from datetime import datetime
from typing import Any

import pytz
from loguru import logger
from loguru._logger import Logger

from cinelog.core.config import settings


def file_formatter(record: Any) -> str:
    fmt = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

    extras = record.get("extra", {})
    if extras:
        fmt += " | " + " ".join(f"{key}={{extra[{key}]}}" for key in extras)
    fmt += "\n"

    if record["exception"]:
        fmt += "{exception}"

    return fmt


def console_formatter(record: Any) -> str:
    fmt = "<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> <cyan>{name}</cyan>:<blue>{line}</blue> - {message}\n"

    if record["exception"]:
        fmt += "{exception}"

    return fmt


class InterceptHandler(logging.Handler):
    """Forwards stdlib log records of the cinelog modules to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _add_file_sinks(log_path: str) -> None:
    os.makedirs(log_path, exist_ok=True)

    if settings.DEBUG:
        logger.add(
            os.path.join(log_path, "debug.log"),
            format=file_formatter,
            level="DEBUG",
            rotation="00:00",  # Rotate daily at midnight
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            retention="7 days",
        )

    logger.add(
        os.path.join(log_path, "error.log"),
        format=file_formatter,
        level="ERROR",
        rotation="00:00",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=True,
        retention="30 days",
    )

    logger.add(
        os.path.join(log_path, "info.log"),
        format=file_formatter,
        level="INFO",
        rotation="00:00",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=True,
    )


def setup_logger(name: str, log_dir: str | None = None) -> Logger:
    """
    Configure the loguru sinks for a process.

    A coloured stderr sink is always installed. With ENABLE_FILE_LOGGING set,
    per-level files are written under ``<log_dir>/<today>/<name>``, where today
    is taken in LOG_TIMEZONE. Records of the stdlib ``cinelog`` loggers are
    forwarded to the same sinks.
    """
    logger.remove()  # Remove default handler

    if settings.ENABLE_FILE_LOGGING:
        today = datetime.now(pytz.timezone(settings.LOG_TIMEZONE)).strftime("%Y-%m-%d")
        _add_file_sinks(os.path.join(log_dir or settings.LOG_DIR, today, name))

    logger.add(
        sys.stderr,
        format=console_formatter,
        level="DEBUG" if settings.DEBUG else "INFO",
        enqueue=True,
        backtrace=True,
        diagnose=True,
        colorize=True,
    )

    app_logger = logging.getLogger("cinelog")
    app_logger.handlers = [InterceptHandler()]
    app_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    app_logger.propagate = False

    return logger  # type: ignore
