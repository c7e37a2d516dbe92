"""Loguru setup for the explorer API, the report CLI and Alembic runs.

Stdlib loggers (uvicorn, sqlalchemy, alembic) are routed through Loguru so
every record shares one format. ERROR and above can be mirrored to Slack.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from app.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[name]}:{function}:{line} | {message}"

LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

# Loggers that install their own handlers at startup
STDLIB_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "alembic")

_configured = False


class InterceptHandler(logging.Handler):
    """Redirect stdlib logs to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_name == "emit":
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(name=record.name).log(level, record.getMessage())


def _slack_sink(message: Any) -> None:
    record = message.record
    text = (
        f"[{settings.ENV}] [{record['level'].name}] "
        f"{record['extra'].get('name', 'explorer')}:{record['function']}:{record['line']}\n{record['message']}"
    )
    try:
        httpx.post(settings.SLACK_WEBHOOK_URL, json={"text": text}, timeout=5.0)
    except httpx.HTTPError:
        # Logging from here would recurse into this sink
        pass


def resolve_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    level = LEVEL_ALIASES.get(level, level)
    try:
        logger.level(level)
    except ValueError:
        return "INFO"
    return level


def configure_logging() -> None:
    global _configured
    if _configured:
        return
    _configured = True

    level = resolve_level(settings.effective_log_level)

    logger.remove()
    logger.configure(extra={"name": "explorer"})
    logger.add(sys.stdout, level=level, format=LOG_FORMAT, backtrace=False, diagnose=False)

    if settings.LOG_FILE_ENABLED:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "explorer.log",
            level=level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    if settings.SLACK_WEBHOOK_URL:
        logger.add(_slack_sink, level="ERROR", enqueue=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # Let these propagate to the root intercept instead of printing twice
    for name in STDLIB_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = []
        stdlib_logger.propagate = True


def get_logger(name: str) -> logger.__class__:
    return logger.bind(name=name)


configure_logging()
