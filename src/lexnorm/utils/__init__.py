"""Utility helpers shared across lexnorm modules."""

from .helpers import ensure_directory, serialize_json, to_sentence_case
from .logging import configure_logging, get_logger, log_timing, logging_context

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "log_timing",
    "to_sentence_case",
    "ensure_directory",
    "serialize_json",
]
