"""Stop-word stripping with a pattern generated from a word set."""

from __future__ import annotations

from typing import Iterable, List, Optional

from lexnorm.config.policies import StopWordPolicy
from lexnorm.patterns import Pattern, Pipeline, pattern_from_word_set, remove_all_step, squish_step
from lexnorm.patterns.compiler import WordSet


class StopWordStripper:
    """Remove whole-token stop words and collapse the gaps they leave.

    Words only match as complete tokens, so ``a`` is stripped from
    ``on a mat`` but not from ``database``.
    """

    def __init__(
        self,
        words: WordSet | None = None,
        *,
        case_sensitive: bool | None = None,
        policy: StopWordPolicy | None = None,
    ) -> None:
        policy = policy or StopWordPolicy()
        source = words if words is not None else policy.words
        sensitive = policy.case_sensitive if case_sensitive is None else case_sensitive
        self._pattern = pattern_from_word_set(source, case_sensitive=sensitive)
        self._pipeline = Pipeline(
            name="stop_words",
            steps=(
                remove_all_step(self._pattern, separator=" ", name="strip_stop_words"),
                squish_step(),
            ),
        )

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    def strip(self, text: str) -> str:
        return self._pipeline.run(text)

    def strip_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[str]]:
        return self._pipeline.run_batch(texts, max_workers=max_workers)


__all__ = ["StopWordStripper"]
