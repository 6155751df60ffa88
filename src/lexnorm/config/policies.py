"""Policy models holding the options of every field normalizer."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from lexnorm.patterns.compiler import compile_pattern

ENGLISH_MONTHS: List[str] = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _validate_patterns(values: Iterable[str]) -> List[str]:
    cleaned: List[str] = []
    for value in values:
        compile_pattern(value)
        cleaned.append(value)
    return cleaned


class CaseNumberPolicy(BaseModel):
    """Options for the ``<prefix>-<number>/<year>`` case-number parser."""

    prefixes: List[str] = Field(
        default_factory=lambda: ["C", "T"],
        description="Closed alphabet of court prefixes (C: Court of Justice, T: General Court).",
    )

    @field_validator("prefixes")
    @classmethod
    def _normalize_prefixes(cls, value: List[str]) -> List[str]:
        cleaned: List[str] = []
        for prefix in value:
            stripped = prefix.strip()
            if len(stripped) != 1 or not stripped.isalpha():
                raise ValueError(f"Court prefixes must be single letters, got {prefix!r}")
            if stripped not in cleaned:
                cleaned.append(stripped)
        if not cleaned:
            raise ValueError("At least one court prefix is required")
        return cleaned


class ProcedurePolicy(BaseModel):
    """Options for the boundary-delimited procedure-header parser."""

    procedure_names: List[str] = Field(
        default_factory=lambda: ["REFERENCE", "ACTION", "APPEAL", "APPLICATION"],
        description="Keywords a procedure header starts with.",
    )
    terminator: str = Field(
        default=r"\b(?:under|pursuant to)\b",
        description="Pattern marking the end of the procedure name.",
    )

    @field_validator("terminator")
    @classmethod
    def _compile_terminator(cls, value: str) -> str:
        compile_pattern(value)
        return value

    @field_validator("procedure_names")
    @classmethod
    def _require_names(cls, value: List[str]) -> List[str]:
        cleaned = [name.strip() for name in value if name.strip()]
        if not cleaned:
            raise ValueError("At least one procedure name is required")
        return cleaned


class JudgeRosterPolicy(BaseModel):
    """Options for the judge-roster reduction pipeline.

    ``roster_suffix`` is matched literally at the end of the isolated roster;
    rosters that do not close with it resolve to no result.
    Capitalised words of ``role_titles`` may not appear in a parsed name; a
    title variant missing from both role lists is reported as a shape
    violation instead of being returned as a judge.
    """

    roster_prefix: str = Field(default="composed of")
    roster_suffix: str = Field(default=", Judges,")
    role_titles: List[str] = Field(
        default_factory=lambda: [
            "Presidents of Chambers",
            "President of the Chamber",
            "President of Chamber",
            "acting as President of the Chamber",
            "Acting President",
            "Vice-President",
            "President",
            "Judge",
        ]
    )
    role_patterns: List[str] = Field(
        default_factory=lambda: [r"acting as President of the \w+ Chamber"],
        description="Role titles with a variable part, given as patterns.",
    )
    initials_patterns: List[str] = Field(
        default_factory=lambda: [
            r"\b[^\W\d_a-z]\.\s?-\s?[^\W\d_a-z]\.",
            r"\b(?:Chr|Th|Ch)\.(?=\s)",
            r"\b[^\W\d_a-z]\.",
        ],
        description=(
            "Initials variants stripped in order: hyphenated, abbreviated, dotted. "
            "[^\\W\\d_a-z] is any letter except ASCII lower-case."
        ),
    )

    @field_validator("initials_patterns", "role_patterns")
    @classmethod
    def _compile_patterns(cls, value: List[str]) -> List[str]:
        return _validate_patterns(value)

    @field_validator("role_titles")
    @classmethod
    def _clean_titles(cls, value: List[str]) -> List[str]:
        return [title.strip() for title in value if title.strip()]


class StopWordPolicy(BaseModel):
    """Stop words as a mapping of word to inclusion flag."""

    words: Dict[str, bool] = Field(
        default_factory=lambda: {"a": True, "an": True, "the": True},
    )
    case_sensitive: bool = True

    @field_validator("words", mode="before")
    @classmethod
    def _coerce_words(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {value: True}
        if isinstance(value, (list, tuple, set, frozenset)):
            return {str(word): True for word in value}
        return value


class DatePolicy(BaseModel):
    """Options for the ``<day> <month-name> <year>`` date extractor."""

    months: List[str] = Field(default_factory=lambda: list(ENGLISH_MONTHS))

    @model_validator(mode="after")
    def _twelve_months(self) -> "DatePolicy":
        if len(self.months) != 12:
            raise ValueError("months must list exactly twelve month names")
        return self


class BatchPolicy(BaseModel):
    """Batch execution options."""

    max_workers: int = Field(default=1, ge=1)


class Policies(BaseModel):
    """Root policy container."""

    policy_version: str = Field(default="2026-10-18")
    case_number: CaseNumberPolicy = Field(default_factory=CaseNumberPolicy)
    procedure: ProcedurePolicy = Field(default_factory=ProcedurePolicy)
    judges: JudgeRosterPolicy = Field(default_factory=JudgeRosterPolicy)
    stop_words: StopWordPolicy = Field(default_factory=StopWordPolicy)
    dates: DatePolicy = Field(default_factory=DatePolicy)
    batch: BatchPolicy = Field(default_factory=BatchPolicy)

    @model_validator(mode="after")
    def _validate_policy_version(self) -> "Policies":
        if not self.policy_version:
            raise ValueError("policy_version must be provided")
        return self


def _resolve_env_overrides(raw: dict) -> dict:
    """Apply environment variable overrides using LEXNORM_POLICY__ prefix."""

    prefix = "LEXNORM_POLICY__"
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        cursor = raw
        for part in path[:-1]:
            cursor = cursor.setdefault(part, {})
        try:
            parsed = json.loads(value)
        except (TypeError, json.JSONDecodeError):
            parsed = value
        cursor[path[-1]] = parsed
    return raw


def load_policies(source: Path | Dict[str, Any] | None = None) -> Policies:
    """Load policies from a dictionary or YAML file with environment overrides."""

    if source is None:
        raw: Dict[str, Any] = {}
    elif isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Policy file not found: {source}")
        with source.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    else:
        raw = dict(source)
    hydrated = _resolve_env_overrides(raw)
    return Policies.model_validate(hydrated)


__all__ = [
    "ENGLISH_MONTHS",
    "Policies",
    "load_policies",
    "CaseNumberPolicy",
    "ProcedurePolicy",
    "JudgeRosterPolicy",
    "StopWordPolicy",
    "DatePolicy",
    "BatchPolicy",
]
