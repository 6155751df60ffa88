import pytest

from lexnorm.patterns import (
    GroupReferenceError,
    PatternSyntaxError,
    compile_pattern,
    remove_all,
    remove_all_batch,
    remove_first,
    replace_all,
    replace_all_batch,
    replace_first,
    squish,
    squish_batch,
)


def test_replace_first_and_all() -> None:
    assert replace_first(r"\d", "a1b2c3", "#") == "a#b2c3"
    assert replace_all(r"\d", "a1b2c3", "#") == "a#b#c#"


def test_replacement_templates_reference_groups() -> None:
    assert replace_all(r"(\w+)@(\w+)", "user@host", r"\2 at \1") == "host at user"
    assert replace_all(r"(?P<serial>\d+)/(?P<year>\d+)", "370/12", r"\g<year>-\g<serial>") == "12-370"
    assert replace_first(r"(a)", "aaa", r"\g<1>\g<1>") == "aaaa"


def test_escaped_backslash_is_not_a_group_reference() -> None:
    assert replace_all(r"-", "a-b", r"\\5") == "a\\5b"


@pytest.mark.parametrize(
    "template",
    [r"\2", r"\g<3>", r"\g<missing>"],
)
def test_undefined_group_reference_is_rejected_before_substitution(template: str) -> None:
    with pytest.raises(GroupReferenceError) as excinfo:
        replace_all(r"(\d+)/(\d+)", "370/12", template)
    assert excinfo.value.group_count == 2


def test_undefined_group_reference_fails_even_without_a_match() -> None:
    with pytest.raises(GroupReferenceError):
        replace_first(r"(x)", "no match here", r"\2")


def test_malformed_template_escape_is_a_syntax_error() -> None:
    with pytest.raises(PatternSyntaxError):
        replace_all(r"a", "abc", r"\q")


def test_remove_first_and_all() -> None:
    assert remove_first(r"\d+", "a1 b22 c333") == "a b22 c333"
    assert remove_all(r"\d+", "a1 b22 c333") == "a b c"


def test_remove_with_separator_keeps_words_apart() -> None:
    assert remove_all(r"-", "left-right") == "leftright"
    assert remove_all(r"-", "left-right", separator=" ") == "left right"


def test_removal_leaves_unmatched_text_unchanged() -> None:
    assert remove_all(r"\d", "no digits") == "no digits"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  a   b\t\nc  ", "a b c"),
        ("single", "single"),
        ("", ""),
        (" \n\t ", ""),
    ],
)
def test_squish_trims_and_collapses_whitespace(text: str, expected: str) -> None:
    assert squish(text) == expected
    assert squish(squish(text)) == squish(text)


def test_squish_output_has_no_double_or_edge_spaces() -> None:
    result = squish("  Reference   for a\n\npreliminary   ruling ")
    assert "  " not in result
    assert result == result.strip()


@pytest.mark.parametrize("size", [0, 1, 7])
def test_batch_reducers_preserve_length(size: int) -> None:
    texts = [None if index == 0 else f" item  {index} " for index in range(size)]
    replaced = replace_all_batch(r"\d", texts, "#")
    removed = remove_all_batch(r"\d", texts)
    squished = squish_batch(texts)
    assert len(replaced) == len(removed) == len(squished) == size
    if size:
        assert replaced[0] is None and removed[0] is None and squished[0] is None
    for index in range(1, size):
        assert squished[index] == f"item {index}"
        assert "#" in replaced[index]


def test_batch_replace_validates_template_before_any_element() -> None:
    with pytest.raises(GroupReferenceError):
        replace_all_batch(r"(\d)", ["1", "2"], r"\3")


def test_parallel_remove_batch_keeps_order() -> None:
    pattern = compile_pattern(r"[aeiou]")
    texts = [f"word{index}" for index in range(64)]
    assert remove_all_batch(pattern, texts, max_workers=8) == [f"wrd{index}" for index in range(64)]
