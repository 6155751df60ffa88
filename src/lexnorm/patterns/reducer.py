"""Removal and replacement of matched spans.

Templates use Python's group reference syntax: ``\\1`` or ``\\g<1>`` by index,
``\\g<name>`` by name.  References are validated against the pattern before
substitution so that a bad template fails at the call, not halfway through a
batch.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Optional

from .batch import apply_batch
from .compiler import Pattern, compile_pattern
from .errors import GroupReferenceError, PatternSyntaxError
from .matcher import PatternLike

_TEMPLATE_ESCAPE = re.compile(r"\\(\\|g<([^>]*)>|([1-9]\d?))")
_WHITESPACE_RUN = re.compile(r"\s+")


@lru_cache(maxsize=512)
def _validate_template(pattern: Pattern, template: str) -> str:
    group_count = pattern.group_count
    names = pattern.compiled.groupindex
    for escape in _TEMPLATE_ESCAPE.finditer(template):
        escaped, bracketed, numeric = escape.groups()
        if escaped == "\\":
            continue
        reference = bracketed if bracketed is not None else numeric
        if reference.isdigit():
            if int(reference) > group_count:
                raise GroupReferenceError(template, reference, group_count)
        elif reference not in names:
            raise GroupReferenceError(template, reference, group_count)
    try:
        # Surfaces malformed escapes such as "\q" before any text is touched.
        pattern.compiled.sub(template, "")
    except re.error as exc:
        raise PatternSyntaxError(template, exc.msg, exc.pos) from exc
    return template


def _replace(pattern: PatternLike, text: str, template: str, count: int) -> str:
    compiled = compile_pattern(pattern)
    _validate_template(compiled, template)
    return compiled.compiled.sub(template, text, count=count)


def replace_first(pattern: PatternLike, text: str, template: str) -> str:
    return _replace(pattern, text, template, 1)


def replace_all(pattern: PatternLike, text: str, template: str) -> str:
    return _replace(pattern, text, template, 0)


def remove_first(pattern: PatternLike, text: str, *, separator: str = "") -> str:
    """Remove the first match.

    Pass ``separator=" "`` when the match may sit between two words, then
    :func:`squish` the result.
    """

    compiled = compile_pattern(pattern)
    return compiled.compiled.sub(lambda _: separator, text, count=1)


def remove_all(pattern: PatternLike, text: str, *, separator: str = "") -> str:
    compiled = compile_pattern(pattern)
    return compiled.compiled.sub(lambda _: separator, text)


def squish(text: str) -> str:
    """Trim both ends and collapse interior whitespace runs to one space."""

    return _WHITESPACE_RUN.sub(" ", text).strip()


def replace_all_batch(
    pattern: PatternLike,
    texts: Iterable[Optional[str]],
    template: str,
    *,
    max_workers: int = 1,
) -> List[Optional[str]]:
    compiled = compile_pattern(pattern)
    _validate_template(compiled, template)
    return apply_batch(
        lambda text: replace_all(compiled, text, template),
        texts,
        max_workers=max_workers,
        label="replace_all",
    )


def remove_all_batch(
    pattern: PatternLike,
    texts: Iterable[Optional[str]],
    *,
    separator: str = "",
    max_workers: int = 1,
) -> List[Optional[str]]:
    compiled = compile_pattern(pattern)
    return apply_batch(
        lambda text: remove_all(compiled, text, separator=separator),
        texts,
        max_workers=max_workers,
        label="remove_all",
    )


def squish_batch(texts: Iterable[Optional[str]]) -> List[Optional[str]]:
    return apply_batch(squish, texts, label="squish")


__all__ = [
    "replace_first",
    "replace_all",
    "remove_first",
    "remove_all",
    "squish",
    "replace_all_batch",
    "remove_all_batch",
    "squish_batch",
]
