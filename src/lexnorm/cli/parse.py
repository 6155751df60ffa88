"""Single-string parsing commands."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.table import Table

from lexnorm.fields import StopWordStripper, prepare_text

from .common import console, get_state

app = typer.Typer(
    add_completion=False,
    help="Parse one string with a field normalizer and print the result.",
    no_args_is_help=True,
)


def _no_result(field: str) -> None:
    console.print(f"[yellow]No {field} found[/yellow]")


def _field_table(title: str, rows: List[tuple[str, str]]) -> Table:
    table = Table(title=title, box=None)
    table.add_column("Field")
    table.add_column("Value")
    for name, value in rows:
        table.add_row(name, value)
    return table


@app.command("case-number")
def case_number_command(ctx: typer.Context, text: str = typer.Argument(..., help="Text to search.")) -> None:
    """Parse every case number such as ``C-370/12``."""

    parser = get_state(ctx).normalizers().case_number
    found = parser.parse_all(text)
    if not found:
        _no_result("case number")
        return
    table = Table(title="Case numbers", box=None)
    for column in ("Case", "Prefix", "Number", "Year"):
        table.add_column(column)
    for case in found:
        table.add_row(case.format(), case.prefix, str(case.number), str(case.year))
    console.print(table)


@app.command("procedure")
def procedure_command(ctx: typer.Context, text: str = typer.Argument(...)) -> None:
    """Parse the procedure name opening a judgment header."""

    header = get_state(ctx).normalizers().procedure.parse(text)
    if header is None:
        _no_result("procedure header")
        return
    console.print(_field_table("Procedure", [("Name", header.name), ("Isolated", header.raw)]))


@app.command("judges")
def judges_command(
    ctx: typer.Context,
    text: str = typer.Argument(...),
    trace: bool = typer.Option(False, "--trace", help="Print every intermediate string."),
) -> None:
    """Parse a ``composed of ...`` roster into surnames."""

    parser = get_state(ctx).normalizers().judges
    result = parser.trace(text)
    if trace:
        table = Table(title="Roster pipeline", box=None)
        table.add_column("Step")
        table.add_column("Output")
        for step, output in result.trace:
            table.add_row(step, repr(output))
        console.print(table)
    if result.violation is not None:
        console.print(f"[red]Shape violation:[/red] {result.violation.describe()}")
    roster = parser.roster_from(result)
    if roster is None:
        _no_result("judge roster")
        return
    rapporteur = parser.extract_rapporteur(text)
    rows = [(str(index), name) for index, name in enumerate(roster.names, start=1)]
    if rapporteur:
        rows.append(("Rapporteur", rapporteur))
    console.print(_field_table("Judges", rows))


@app.command("dates")
def dates_command(ctx: typer.Context, text: str = typer.Argument(...)) -> None:
    """Extract ``<day> <month> <year>`` dates in order of appearance."""

    found = get_state(ctx).normalizers().dates.extract_all(text)
    if not found:
        _no_result("date")
        return
    console.print(_field_table("Dates", [(str(i), value.isoformat()) for i, value in enumerate(found, 1)]))


@app.command("stopwords")
def stopwords_command(
    ctx: typer.Context,
    text: str = typer.Argument(...),
    word: Optional[List[str]] = typer.Option(
        None, "--word", "-w", help="Stop word (repeatable); defaults to the configured set."
    ),
) -> None:
    """Strip whole-token stop words."""

    if word:
        stripper = StopWordStripper(word)
    else:
        stripper = get_state(ctx).normalizers().stop_words
    console.print(stripper.strip(text))


@app.command("clean")
def clean_command(text: str = typer.Argument(...)) -> None:
    """Lower-case and strip punctuation and digits for text analysis."""

    console.print(prepare_text(text))
