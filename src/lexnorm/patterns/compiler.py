"""Pattern compilation and the process-wide compiled-pattern cache."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Mapping, Union

from .errors import PatternSyntaxError

# Never matches; used when a word set is empty.
_EMPTY_ALTERNATION = r"(?!)"

WordSet = Union[Iterable[str], Mapping[str, bool]]


@dataclass(frozen=True)
class Pattern:
    """Immutable compiled regular expression.

    ``^`` and ``$`` anchor the whole input unless ``multiline`` is set.
    """

    source: str
    compiled: re.Pattern
    case_sensitive: bool = True
    multiline: bool = False

    @property
    def group_count(self) -> int:
        return self.compiled.groups

    @property
    def group_names(self) -> tuple[str, ...]:
        return tuple(self.compiled.groupindex)

    def __str__(self) -> str:
        return self.source


@lru_cache(maxsize=1024)
def _compile(source: str, flags: int) -> re.Pattern:
    try:
        compiled = re.compile(source, flags)
    except re.error as exc:
        raise PatternSyntaxError(source, exc.msg, exc.pos) from exc
    return compiled


def compile_pattern(
    source: Union[str, Pattern],
    *,
    case_sensitive: bool = True,
    multiline: bool = False,
) -> Pattern:
    """Compile *source* into a :class:`Pattern`.

    Already-compiled patterns are returned unchanged.  Raises
    :class:`PatternSyntaxError` for malformed expressions; matching never
    raises for syntax reasons.
    """

    if isinstance(source, Pattern):
        return source
    if not isinstance(source, str):
        raise TypeError(f"Pattern source must be a string, got {type(source).__name__}")

    flags = 0
    if not case_sensitive:
        flags |= re.IGNORECASE
    if multiline:
        flags |= re.MULTILINE
    return Pattern(
        source=source,
        compiled=_compile(source, flags),
        case_sensitive=case_sensitive,
        multiline=multiline,
    )


def _included_words(words: WordSet) -> list[str]:
    if isinstance(words, Mapping):
        candidates = [word for word, include in words.items() if include]
    elif isinstance(words, str):
        candidates = [words]
    else:
        candidates = list(words)

    cleaned: list[str] = []
    for word in candidates:
        if not isinstance(word, str):
            raise TypeError("Word sets must contain strings only")
        stripped = word.strip()
        if stripped and stripped not in cleaned:
            cleaned.append(stripped)
    return cleaned


def pattern_from_word_set(words: WordSet, *, case_sensitive: bool = True) -> Pattern:
    """Build ``\\b(w1|w2|...)\\b`` from *words*.

    *words* is either an iterable of words or a mapping of word to inclusion
    flag.  Longer words are placed first so that a word is never shadowed by
    one of its own prefixes, and every word is escaped so it matches
    literally.
    """

    included = _included_words(words)
    if not included:
        return compile_pattern(_EMPTY_ALTERNATION, case_sensitive=case_sensitive)
    ordered = sorted(included, key=lambda word: (-len(word), word))
    alternation = "|".join(re.escape(word) for word in ordered)
    return compile_pattern(rf"\b({alternation})\b", case_sensitive=case_sensitive)


def cache_info():
    """Return hit/miss statistics of the compiled-pattern cache."""

    return _compile.cache_info()


def clear_cache() -> None:
    _compile.cache_clear()


__all__ = [
    "Pattern",
    "WordSet",
    "compile_pattern",
    "pattern_from_word_set",
    "cache_info",
    "clear_cache",
]
