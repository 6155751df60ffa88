from __future__ import annotations

import pytest

from lexnorm.config.policies import ProcedurePolicy
from lexnorm.fields import ProcedureHeaderParser


@pytest.fixture()
def parser() -> ProcedureHeaderParser:
    return ProcedureHeaderParser()


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "REFERENCE for a preliminary ruling under Article 267 TFEU from the Supreme Court",
            "Reference for a preliminary ruling",
        ),
        ("APPEAL under Article 56 of the Statute of the Court of Justice", "Appeal"),
        ("ACTION for annulment under Article 263 TFEU, brought on 4 May 2012", "Action for annulment"),
        (
            "APPLICATION for revision pursuant to Article 44 of the Statute",
            "Application for revision",
        ),
    ],
)
def test_parses_procedure_names(parser: ProcedureHeaderParser, text: str, expected: str) -> None:
    header = parser.parse(text)
    assert header is not None
    assert header.name == expected


def test_isolation_stops_at_the_first_terminator(parser: ProcedureHeaderParser) -> None:
    header = parser.parse("ACTION for failure to fulfil obligations under Article 258 TFEU under protest")
    assert header.name == "Action for failure to fulfil obligations"
    assert header.raw == "ACTION for failure to fulfil obligations under"


def test_interior_whitespace_is_collapsed(parser: ProcedureHeaderParser) -> None:
    header = parser.parse("REFERENCE   for a\tpreliminary  ruling under Article 267")
    assert header.name == "Reference for a preliminary ruling"


def test_terminator_must_be_a_whole_word(parser: ProcedureHeaderParser) -> None:
    assert parser.parse("APPEAL against an undertaking") is None


def test_headers_must_open_the_text(parser: ProcedureHeaderParser) -> None:
    assert parser.parse("In this REFERENCE for a preliminary ruling under Article 267") is None


def test_unknown_keywords_are_not_headers(parser: ProcedureHeaderParser) -> None:
    assert parser.parse("OPINION of the Advocate General under Article 252") is None


def test_custom_names_and_terminator() -> None:
    policy = ProcedurePolicy(procedure_names=["RECOURS"], terminator=r"\bintroduit\b")
    parser = ProcedureHeaderParser(policy)
    assert parser.parse("RECOURS en annulation introduit le 4 mai").name == "Recours en annulation"


def test_parse_batch_keeps_row_positions(parser: ProcedureHeaderParser) -> None:
    results = parser.parse_batch(["APPEAL under Article 56", None, "unrelated"])
    assert [result.name if result else None for result in results] == ["Appeal", None, None]
