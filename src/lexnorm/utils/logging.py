"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:  # pragma: no cover
    from ..config.settings import Settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[run_id]}</cyan> | "
    "<magenta>{extra[step]}</magenta> | "
    "{message} | {extra}"
)

logger.configure(extra={"run_id": "-", "step": "-"})


def _stderr_sink(message) -> None:
    # Resolved per call so redirected streams are honoured.
    sys.stderr.write(message)


def configure_logging(
    settings: "Settings | None" = None,
    level: str = "INFO",
    *,
    log_to_file: bool = True,
) -> None:
    """Initialise loguru sinks according to the active settings."""

    from ..config.settings import get_settings

    cfg = settings or get_settings()

    logger.remove()
    logger.add(
        _stderr_sink,
        level=level,
        backtrace=False,
        diagnose=False,
        format=_LOG_FORMAT,
    )
    if log_to_file:
        log_path = cfg.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            format=_LOG_FORMAT,
            level=level,
        )
    logger.configure(extra={"run_id": "-", "step": "-"})


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


__all__ = ["configure_logging", "get_logger", "logging_context", "log_timing"]
