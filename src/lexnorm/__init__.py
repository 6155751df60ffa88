"""Top-level package for pattern-based legal text normalization."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lexnorm")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .fields import (
    CaseNumber,
    CaseNumberParser,
    DateExtractor,
    FieldNormalizers,
    JudgeRoster,
    JudgeRosterParser,
    ProcedureHeader,
    ProcedureHeaderParser,
    StopWordStripper,
    prepare_text,
)
from .patterns import Pipeline, compile_pattern, pattern_from_word_set

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "Pipeline",
    "compile_pattern",
    "pattern_from_word_set",
    "FieldNormalizers",
    "CaseNumber",
    "CaseNumberParser",
    "DateExtractor",
    "JudgeRoster",
    "JudgeRosterParser",
    "ProcedureHeader",
    "ProcedureHeaderParser",
    "StopWordStripper",
    "prepare_text",
]
