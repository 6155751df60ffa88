"""Preparation of free judgment text for token-based analysis."""

from __future__ import annotations

from lexnorm.patterns import Pipeline, remove_all_step, squish_step, transform_step

# Python's re has no POSIX classes; these stand in for [[:punct:]] and [[:digit:]].
_PUNCTUATION = r"(?:[^\w\s]|_)+"
_DIGITS = r"\d+"

TEXT_PIPELINE = Pipeline(
    name="clean_text",
    steps=(
        transform_step(str.lower, name="lower"),
        remove_all_step(_PUNCTUATION, separator=" ", name="strip_punctuation"),
        remove_all_step(_DIGITS, separator=" ", name="strip_digits"),
        squish_step(),
    ),
)


def prepare_text(text: str) -> str:
    """Lower-case *text* and replace punctuation and digit runs with single spaces."""

    return TEXT_PIPELINE.run(text)


__all__ = ["TEXT_PIPELINE", "prepare_text"]
