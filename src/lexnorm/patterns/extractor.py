"""Extraction of the first or every match of a pattern."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .batch import apply_batch
from .compiler import compile_pattern
from .matcher import PatternLike


def extract_first(pattern: PatternLike, text: str) -> str | None:
    """Return the leftmost match of *pattern* in *text*, or ``None``."""

    found = compile_pattern(pattern).compiled.search(text)
    return found.group(0) if found else None


def extract_all(pattern: PatternLike, text: str) -> Tuple[str, ...]:
    """Return every non-overlapping match in order; empty when nothing matches."""

    compiled = compile_pattern(pattern).compiled
    return tuple(match.group(0) for match in compiled.finditer(text))


def extract_groups(pattern: PatternLike, text: str) -> Tuple[str | None, ...] | None:
    """Return the captured groups of the leftmost match, or ``None``."""

    found = compile_pattern(pattern).compiled.search(text)
    return found.groups() if found else None


def extract_first_batch(
    pattern: PatternLike,
    texts: Iterable[Optional[str]],
    *,
    max_workers: int = 1,
) -> List[Optional[str]]:
    compiled = compile_pattern(pattern)
    return apply_batch(
        lambda text: extract_first(compiled, text),
        texts,
        max_workers=max_workers,
        label="extract_first",
    )


def extract_all_batch(
    pattern: PatternLike,
    texts: Iterable[Optional[str]],
    *,
    max_workers: int = 1,
) -> List[Optional[Tuple[str, ...]]]:
    """Batch :func:`extract_all`; missing inputs yield ``None``, unmatched ones ``()``."""

    compiled = compile_pattern(pattern)
    return apply_batch(
        lambda text: extract_all(compiled, text),
        texts,
        max_workers=max_workers,
        label="extract_all",
    )


__all__ = [
    "extract_first",
    "extract_all",
    "extract_groups",
    "extract_first_batch",
    "extract_all_batch",
]
