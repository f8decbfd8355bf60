"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from ..config.settings import Settings, get_settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[batch_id]}</cyan> | "
    "<magenta>{extra[step]}</magenta> | "
    "{message}"
)


def configure_logging(settings: Settings | None = None, level: str | None = None) -> None:
    """Initialise loguru sinks according to the active settings."""

    cfg = settings or get_settings()
    resolved_level = (level or cfg.log_level).upper()
    log_path = cfg.log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved_level,
        backtrace=False,
        diagnose=False,
        format=_LOG_FORMAT,
    )
    logger.add(
        log_path,
        rotation="10 MB",
        retention="14 days",
        format=_LOG_FORMAT,
        level=resolved_level,
    )
    logger.configure(extra={"batch_id": "-", "step": "-"})


def new_batch_id() -> str:
    """Return a short identifier that tags every log line of one batch run."""

    return uuid.uuid4().hex[:8]


def get_logger(**context: Any):
    """Return a contextualised logger instance."""

    return logger.bind(**context)


@contextmanager
def logging_context(**context: Any):
    """Context manager that temporarily binds structured context fields."""

    with logger.contextualize(**context):
        yield logger


@contextmanager
def log_timing(step: str, *, logger_=logger):
    """Helper to log elapsed time for a block."""

    start = datetime.now(timezone.utc)
    try:
        yield
    finally:
        elapsed = (datetime.now(timezone.utc) - start).total_seconds()
        logger_.info("Step timing", step=step, seconds=elapsed)


__all__ = ["configure_logging", "get_logger", "new_batch_id", "logging_context", "log_timing"]
