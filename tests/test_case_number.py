from __future__ import annotations

import pytest
from pydantic import ValidationError

from lexnorm.config.policies import CaseNumberPolicy
from lexnorm.fields import CaseNumber, CaseNumberParser


@pytest.fixture()
def parser() -> CaseNumberParser:
    return CaseNumberParser()


def test_parses_case_number_from_opening_clause(parser: CaseNumberParser) -> None:
    case = parser.parse("In Case C-370/12,")
    assert case == CaseNumber(prefix="C", number=370, year=12)
    assert case.format() == "C-370/12"
    assert str(case) == "C-370/12"


def test_missing_case_number_is_absent(parser: CaseNumberParser) -> None:
    assert parser.parse("JUDGMENT OF THE COURT (Full Court)") is None
    assert parser.parse_all("no citation here") == ()


def test_prefix_comes_from_the_text_not_the_policy_order(parser: CaseNumberParser) -> None:
    assert parser.parse("Case T-45/98 and others").prefix == "T"
    reordered = CaseNumberParser(CaseNumberPolicy(prefixes=["T", "C"]))
    assert reordered.parse("Case C-45/98").prefix == "C"


def test_prefixes_outside_the_alphabet_are_ignored(parser: CaseNumberParser) -> None:
    assert parser.parse("Case F-12/09") is None


def test_four_digit_years_keep_their_width(parser: CaseNumberParser) -> None:
    case = parser.parse("Joined Cases C-12/2019")
    assert case.year == 2019
    assert case.year_digits == 4
    assert case.format() == "C-12/2019"


def test_two_digit_years_keep_leading_zero(parser: CaseNumberParser) -> None:
    case = parser.parse("Case C-5/05")
    assert case.year == 5
    assert case.format() == "C-5/05"


def test_other_year_widths_are_not_case_numbers(parser: CaseNumberParser) -> None:
    assert parser.parse("paragraph C-1/123 of the report") is None


def test_number_must_be_a_whole_token(parser: CaseNumberParser) -> None:
    assert parser.parse("ABC-370/12") is None


@pytest.mark.parametrize("token", ["C-370/12", "T-1/99", "C-1234/2014"])
def test_formatted_record_parses_back_to_itself(parser: CaseNumberParser, token: str) -> None:
    case = parser.parse(f"In Case {token},")
    assert case.format() == token
    assert parser.parse(case.format()) == case


def test_parse_all_returns_every_citation_in_order(parser: CaseNumberParser) -> None:
    found = parser.parse_all("Joined Cases C-1/10, T-22/11 and C-333/2012")
    assert [case.format() for case in found] == ["C-1/10", "T-22/11", "C-333/2012"]


def test_parse_batch_keeps_one_result_per_row(parser: CaseNumberParser) -> None:
    results = parser.parse_batch(["In Case C-370/12,", None, "nothing", "Case T-5/01"])
    assert len(results) == 4
    assert results[0].number == 370
    assert results[1] is None
    assert results[2] is None
    assert results[3].prefix == "T"


def test_case_number_records_are_immutable() -> None:
    case = CaseNumber(prefix="C", number=1, year=10)
    with pytest.raises(ValidationError):
        case.number = 2  # type: ignore[misc]


@pytest.mark.parametrize("prefixes", [["CT"], [], ["1"]])
def test_invalid_prefix_alphabets_are_rejected(prefixes: list[str]) -> None:
    with pytest.raises(ValidationError):
        CaseNumberPolicy(prefixes=prefixes)
