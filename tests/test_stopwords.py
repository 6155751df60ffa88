from __future__ import annotations

import pytest

from lexnorm.config.policies import StopWordPolicy
from lexnorm.fields import StopWordStripper


def test_strips_whole_token_stop_words() -> None:
    stripper = StopWordStripper({"the", "a", "an"})
    assert stripper.strip("the cat sat on a mat") == "cat sat on mat"


def test_words_inside_other_words_are_kept() -> None:
    stripper = StopWordStripper(["a"])
    assert stripper.strip("a database") == "database"


def test_result_has_single_spaces_only() -> None:
    stripper = StopWordStripper(["the"])
    result = stripper.strip("  the   court and the   parties ")
    assert result == "court and parties"


def test_matching_is_case_sensitive_by_default() -> None:
    stripper = StopWordStripper(["the"])
    assert stripper.strip("The Court of the Union") == "The Court of Union"


def test_case_insensitive_matching_is_opt_in() -> None:
    stripper = StopWordStripper(["the"], case_sensitive=False)
    assert stripper.strip("The Court of the Union") == "Court of Union"


def test_accepts_inclusion_mapping() -> None:
    stripper = StopWordStripper({"of": True, "the": False})
    assert stripper.strip("the Court of Justice") == "the Court Justice"


def test_empty_word_set_only_squishes() -> None:
    stripper = StopWordStripper([])
    assert stripper.strip(" the  cat ") == "the cat"


def test_defaults_come_from_policy() -> None:
    stripper = StopWordStripper(policy=StopWordPolicy(words=["of"]))
    assert stripper.strip("Court of Justice") == "Court Justice"
    assert StopWordStripper().strip("an appeal") == "appeal"


@pytest.mark.parametrize("workers", [1, 3])
def test_strip_batch_keeps_row_positions(workers: int) -> None:
    stripper = StopWordStripper(["a"])
    results = stripper.strip_batch(["a b", None, "c a d"], max_workers=workers)
    assert results == ["b", None, "c d"]
