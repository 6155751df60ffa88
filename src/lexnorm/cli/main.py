"""Primary Typer application wiring the lexnorm CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from rich.table import Table

from lexnorm.io import generate_metadata, load_text_corpus, write_frame
from lexnorm.patterns import LexnormError
from lexnorm.processor import CorpusProcessor
from lexnorm.utils.helpers import serialize_json
from lexnorm.utils.logging import configure_logging, logging_context

from . import parse
from .common import (
    CLIError,
    configure_state,
    console,
    get_state,
    parse_override,
    render_panel,
    resolve_path,
)


class LexnormTyper(typer.Typer):
    """Typer subclass that supports registering exception handlers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._exception_handlers: list[tuple[type[BaseException], Callable[[BaseException], Any]]] = []

    def exception_handler(
        self, exception_type: type[BaseException]
    ) -> Callable[[Callable[[BaseException], Any]], Callable[[BaseException], Any]]:
        def decorator(handler: Callable[[BaseException], Any]) -> Callable[[BaseException], Any]:
            self._exception_handlers.append((exception_type, handler))
            return handler

        return decorator

    def _resolve_handler(self, exception: BaseException) -> Callable[[BaseException], Any] | None:
        for registered_type, handler in self._exception_handlers:
            if isinstance(exception, registered_type):
                return handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        standalone = kwargs.get("standalone_mode", True)
        try:
            return super().__call__(*args, **kwargs)
        except BaseException as exc:
            handler = self._resolve_handler(exc)
            if handler is None:
                raise
            result = handler(exc)
            if isinstance(result, typer.Exit):
                # Click's standalone loop has already returned; exit the way it would.
                if standalone:
                    raise SystemExit(result.exit_code) from None
                raise result
            if isinstance(result, BaseException):
                raise result
            return result


app = LexnormTyper(
    add_completion=False,
    help="Extract and normalize structured fields from legal text.",
    no_args_is_help=True,
)


@app.exception_handler(CLIError)
def handle_cli_error(exception: CLIError) -> typer.Exit:
    """Render ``CLIError`` messages without stack traces."""

    console.print(f"[bold red]Error:[/bold red] {exception}")
    return typer.Exit(code=2)


@app.exception_handler(LexnormError)
def handle_pattern_error(exception: LexnormError) -> typer.Exit:
    console.print(f"[bold red]Pattern error:[/bold red] {exception}")
    return typer.Exit(code=2)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit verbose diagnostic output for CLI operations.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    configure_state(ctx, environment=environment, overrides=overrides, verbose=verbose)

    state = ctx.obj
    configure_logging(
        state.settings,
        level="DEBUG" if verbose else state.settings.log_level,
        log_to_file=state.settings.create_dirs,
    )
    if verbose:
        table = Table(title="CLI Context", show_header=False, box=None)
        table.add_row("Environment", state.environment)
        table.add_row("Policy version", state.settings.policy_version)
        console.print(table)
        if state.overrides:
            render_panel("Overrides", state.overrides)


@app.command("normalize")
def normalize_command(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Corpus file (.csv, .jsonl, .ndjson or .parquet)."),
    output_path: Path = typer.Argument(..., help="Destination file; format follows the suffix."),
    column: str = typer.Option("text", "--column", "-c", help="Column holding the text."),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Worker threads; defaults to the batch policy."
    ),
    metadata: Optional[Path] = typer.Option(
        None, "--metadata", help="Write run statistics to this JSON file."
    ),
) -> None:
    """Attach every normalized field to each row of a corpus."""

    state = get_state(ctx)
    source = resolve_path(input_path)
    try:
        frame = load_text_corpus(source, text_column=column)
    except ValueError as exc:
        raise CLIError(str(exc)) from exc

    max_workers = workers or state.settings.policies.batch.max_workers
    processor = CorpusProcessor(state.normalizers(), text_column=column, max_workers=max_workers)
    with logging_context(step="normalize"), console.status(f"Normalizing {frame.height} rows..."):
        result = processor.process(frame)

    try:
        destination = write_frame(result.frame, output_path)
    except ValueError as exc:
        raise CLIError(str(exc)) from exc

    stats = result.metrics.as_dict()
    table = Table(title="Normalization", box=None)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Rows", str(stats["rows_in"]))
    table.add_row("Roster rows", str(stats["roster_rows"]))
    for field_name, count in stats["missing"].items():
        table.add_row(f"Missing {field_name}", str(count))
    table.add_row("Shape violations", str(stats["shape_violations"]))
    console.print(table)
    for violation in result.metrics.violations:
        console.print(f"[red]Shape violation:[/red] {violation.describe()}")

    if metadata is not None:
        document = generate_metadata(stats, state.settings.policies.model_dump())
        serialize_json(document, metadata)
    console.print(f"Wrote {destination}")


app.add_typer(parse.app, name="parse", help="Parse single strings")
