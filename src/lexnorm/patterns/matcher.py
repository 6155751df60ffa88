"""Atomic match evaluation of one pattern against one string."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple, Union

from .compiler import Pattern, compile_pattern

PatternLike = Union[str, Pattern]


@dataclass(frozen=True)
class Match:
    """A single match with its captured groups.

    Groups that did not participate in the match are ``None``.
    """

    start: int
    end: int
    text: str
    groups: Tuple[str | None, ...] = ()

    @classmethod
    def from_re(cls, match: re.Match) -> "Match":
        return cls(
            start=match.start(),
            end=match.end(),
            text=match.group(0),
            groups=match.groups(),
        )

    def group(self, index: int) -> str | None:
        if index == 0:
            return self.text
        return self.groups[index - 1]


def find_matches(pattern: PatternLike, text: str) -> Tuple[Match, ...]:
    """Return every non-overlapping match of *pattern* in left-to-right order."""

    compiled = compile_pattern(pattern)
    return tuple(Match.from_re(match) for match in compiled.compiled.finditer(text))


def first_match(pattern: PatternLike, text: str) -> Match | None:
    compiled = compile_pattern(pattern)
    found = compiled.compiled.search(text)
    return Match.from_re(found) if found else None


def detect(pattern: PatternLike, text: str) -> bool:
    """Return ``True`` when *pattern* matches anywhere in *text*."""

    return compile_pattern(pattern).compiled.search(text) is not None


def count_matches(pattern: PatternLike, text: str) -> int:
    return sum(1 for _ in compile_pattern(pattern).compiled.finditer(text))


__all__ = [
    "Match",
    "PatternLike",
    "find_matches",
    "first_match",
    "detect",
    "count_matches",
]
