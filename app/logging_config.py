"""
logging_config.py — Loguru setup for the User Registry

One sink on stdout. Locally it prints colored lines tagged with the
request id that request_id_middleware binds; behind an https APP_URL it
prints one JSON object per line. uvicorn, SQLAlchemy and the modules'
logging.getLogger(__name__) loggers are forwarded into the same sink.

Called by: app/main.py (at import, before the app is built)
Depends on: LOG_LEVEL, APP_URL environment variables
"""

import logging
import os
import sys

from loguru import logger

_DEV_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[request_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)

# Per-query SQL and per-request access lines duplicate what the middleware logs
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "multipart")

# Logged outside any request
_NO_REQUEST = "-"


def _wants_json(app_url: str) -> bool:
    return app_url.startswith("https://") and "localhost" not in app_url


def setup_logging() -> None:
    """Replace Loguru's default sink and route stdlib logging into it."""
    logger.remove()

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    as_json = _wants_json(os.getenv("APP_URL", ""))

    if as_json:
        logger.add(sys.stdout, level=level, format="{message}", serialize=True)
    else:
        logger.add(sys.stdout, level=level, format=_DEV_FORMAT, colorize=True)
    logger.configure(extra={"request_id": _NO_REQUEST})

    logging.basicConfig(handlers=[_ForwardToLoguru()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging configured", level=level, json=as_json)


class _ForwardToLoguru(logging.Handler):
    """Re-emit stdlib records through Loguru, keeping the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())
