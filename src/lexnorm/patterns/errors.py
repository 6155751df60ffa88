"""Exception taxonomy and shape-violation records for the pattern layer.

Absence of a match is never an error: extractors return ``None`` (or an empty
tuple) and pipelines propagate that value as data.  Only malformed patterns and
replacement templates that reference undefined groups raise.
"""

from __future__ import annotations

from dataclasses import dataclass


class LexnormError(Exception):
    """Base class for every error raised by :mod:`lexnorm`."""


class PatternSyntaxError(LexnormError, ValueError):
    """Raised at compile time when a regular expression is malformed."""

    def __init__(self, source: str, reason: str, position: int | None = None) -> None:
        self.source = source
        self.reason = reason
        self.position = position
        location = f" at position {position}" if position is not None else ""
        super().__init__(f"Invalid pattern {source!r}{location}: {reason}")


class GroupReferenceError(LexnormError, LookupError):
    """Raised when a replacement template references an undefined capture group."""

    def __init__(self, template: str, reference: str, group_count: int) -> None:
        self.template = template
        self.reference = reference
        self.group_count = group_count
        super().__init__(
            f"Template {template!r} references group {reference!r} but the pattern "
            f"defines {group_count} group(s)"
        )


@dataclass(frozen=True)
class ShapeViolation:
    """A pipeline stage found a string whose shape a later stage relies on is wrong.

    Violations are surfaced as data on :class:`~lexnorm.patterns.pipeline.PipelineResult`
    so that the field resolves to ``None`` without aborting a batch.
    """

    pipeline: str
    step: str
    text: str
    expectation: str

    def describe(self) -> str:
        return f"{self.pipeline}:{self.step} expected {self.expectation} but got {self.text!r}"


__all__ = [
    "LexnormError",
    "PatternSyntaxError",
    "GroupReferenceError",
    "ShapeViolation",
]
