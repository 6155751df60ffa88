"""End-to-end smoke tests for the Typer-based lexnorm CLI."""

from __future__ import annotations

import json
from pathlib import Path

import polars as pl
import pytest
import typer
from typer.testing import CliRunner

from lexnorm.cli.common import merge_overrides, parse_override
from lexnorm.cli.main import app

ROSTER = (
    "composed of V. Skouris, President, K. Lenaerts (Rapporteur), Vice-President, "
    "A. Tizzano and M. Berger, Judges,"
)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_env(tmp_path: Path) -> dict[str, str]:
    return {
        "LEXNORM_SETTINGS__PATHS__OUTPUT_DIR": str(tmp_path / "output"),
        "LEXNORM_SETTINGS__PATHS__LOGS_DIR": str(tmp_path / "logs"),
    }


def test_parse_override_builds_nested_mapping() -> None:
    assert parse_override("policies.batch.max_workers=3") == {"policies": {"batch": {"max_workers": 3}}}
    assert parse_override("log_level=DEBUG") == {"log_level": "DEBUG"}


def test_merge_overrides_is_deep() -> None:
    merged = merge_overrides(
        [
            parse_override("policies.batch.max_workers=3"),
            parse_override('policies.case_number.prefixes=["C"]'),
        ]
    )
    assert merged == {"policies": {"batch": {"max_workers": 3}, "case_number": {"prefixes": ["C"]}}}


def test_parse_case_number(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "case-number", "Joined Cases C-370/12 and T-5/2014"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "C-370/12" in result.output
    assert "T-5/2014" in result.output


def test_parse_case_number_reports_absence(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "case-number", "no citation"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "No case number found" in result.output


def test_parse_procedure(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "procedure", "APPEAL under Article 56"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "Appeal" in result.output


def test_parse_judges_with_trace(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "judges", "--trace", ROSTER], env=cli_env)
    assert result.exit_code == 0, result.output
    for name in ("Skouris", "Lenaerts", "Tizzano", "Berger"):
        assert name in result.output
    assert "Rapporteur" in result.output
    assert "strip_initials_1" in result.output


def test_parse_judges_reports_shape_violation(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "judges", "composed of A. Alpha, b. Beta, Judges,"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "Shape violation" in result.output
    assert "No judge roster found" in result.output


def test_parse_dates(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "dates", "lodged on 31 July 2012 and 3 August 2012"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "2012-07-31" in result.output
    assert "2012-08-03" in result.output


def test_parse_stopwords_with_explicit_words(runner: CliRunner, cli_env: dict[str, str]) -> None:
    default = runner.invoke(app, ["parse", "stopwords", "the cat sat on a mat"], env=cli_env)
    custom = runner.invoke(app, ["parse", "stopwords", "-w", "cat", "the cat sat on a mat"], env=cli_env)
    assert default.exit_code == 0, default.output
    assert "cat sat on mat" in default.output
    assert "the sat on a mat" in custom.output


def test_parse_clean(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["parse", "clean", "In Case C-370/12,"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "in case c" in result.output


def test_override_changes_policies(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(
        app,
        ["-o", 'policies.case_number.prefixes=["T"]', "parse", "case-number", "Case C-370/12"],
        env=cli_env,
    )
    assert result.exit_code == 0, result.output
    assert "No case number found" in result.output


def test_invalid_override_fails(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(
        app,
        ["-o", "policies.batch.max_workers=0", "parse", "clean", "text"],
        env=cli_env,
    )
    assert result.exit_code != 0


def test_normalize_writes_output_and_metadata(runner: CliRunner, cli_env: dict[str, str], tmp_path: Path) -> None:
    source = tmp_path / "corpus.jsonl"
    pl.DataFrame({"body": ["In Case C-370/12,", ROSTER, "APPEAL under Article 56"]}).write_ndjson(source)
    destination = tmp_path / "normalized.parquet"
    metadata = tmp_path / "metadata.json"

    result = runner.invoke(
        app,
        [
            "normalize",
            str(source),
            str(destination),
            "--column",
            "body",
            "--workers",
            "2",
            "--metadata",
            str(metadata),
        ],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "Roster rows" in result.output
    frame = pl.read_parquet(destination)
    assert frame["case_number"].to_list() == ["C-370/12", None, None]
    assert frame["judges"].to_list()[1] == ["Skouris", "Lenaerts", "Tizzano", "Berger"]
    assert frame["procedure"].to_list()[2] == "Appeal"
    document = json.loads(metadata.read_text(encoding="utf-8"))
    assert document["stats"]["rows_in"] == 3
    assert document["config"]["case_number"]["prefixes"] == ["C", "T"]


def test_normalize_rejects_missing_column(runner: CliRunner, cli_env: dict[str, str], tmp_path: Path) -> None:
    source = tmp_path / "corpus.csv"
    source.write_text("body\nIn Case C-1/10\n", encoding="utf-8")
    result = runner.invoke(app, ["normalize", str(source), str(tmp_path / "out.csv")], env=cli_env)
    assert result.exit_code != 0
    assert not (tmp_path / "out.csv").exists()


def test_verbose_renders_context_and_overrides(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(
        app,
        ["-v", "-o", "policies.batch.max_workers=2", "parse", "clean", "Text"],
        env=cli_env,
    )
    assert result.exit_code == 0, result.output
    assert "Policy version" in result.output
    assert "Overrides" in result.output
    assert "text" in result.output


@pytest.fixture()
def missing_column_corpus(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, cli_env: dict[str, str]) -> Path:
    for key, value in cli_env.items():
        monkeypatch.setenv(key, value)
    source = tmp_path / "corpus.csv"
    source.write_text("body\nIn Case C-1/10\n", encoding="utf-8")
    return source


def test_console_script_exits_with_code_two_on_cli_error(
    missing_column_corpus: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app(args=["normalize", str(missing_column_corpus), str(tmp_path / "out.csv")], prog_name="lexnorm")

    assert excinfo.value.code == 2
    captured = capsys.readouterr()
    assert "Error:" in captured.out
    assert "Missing text column" in captured.out
    assert "Traceback" not in captured.out + captured.err


def test_embedded_call_reports_exit_code_two(missing_column_corpus: Path, tmp_path: Path) -> None:
    with pytest.raises(typer.Exit) as excinfo:
        app(
            args=["normalize", str(missing_column_corpus), str(tmp_path / "out.csv")],
            standalone_mode=False,
        )
    assert excinfo.value.exit_code == 2
