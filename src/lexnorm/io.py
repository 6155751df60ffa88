"""Corpus I/O backed by polars."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import polars as pl

from lexnorm.utils.helpers import ensure_directory
from lexnorm.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)

SUPPORTED_SUFFIXES = (".csv", ".jsonl", ".ndjson", ".parquet")


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported file type {suffix or '<none>'!r}; expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return suffix


def load_text_corpus(input_path: str | Path, *, text_column: str = "text") -> pl.DataFrame:
    """Read a corpus file into a DataFrame and check that *text_column* exists."""

    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Corpus not found: {path}")

    suffix = _check_suffix(path)
    if suffix == ".csv":
        frame = pl.read_csv(path)
    elif suffix == ".parquet":
        frame = pl.read_parquet(path)
    else:
        frame = pl.read_ndjson(path)

    if text_column not in frame.columns:
        raise ValueError(f"Missing text column {text_column!r}; available: {frame.columns}")
    _LOGGER.info("Loaded corpus", path=str(path), rows=frame.height, columns=frame.columns)
    return frame


def _flatten_nested(frame: pl.DataFrame) -> pl.DataFrame:
    nested = [name for name, dtype in frame.schema.items() if isinstance(dtype, pl.List)]
    if not nested:
        return frame
    return frame.with_columns(
        [pl.col(name).cast(pl.List(pl.Utf8)).list.join("; ").alias(name) for name in nested]
    )


def write_frame(frame: pl.DataFrame, output_path: str | Path) -> Path:
    """Write *frame* to *output_path*; CSV output joins list columns with ``"; "``."""

    path = Path(output_path)
    suffix = _check_suffix(path)
    ensure_directory(path.parent)
    if suffix == ".csv":
        _flatten_nested(frame).write_csv(path)
    elif suffix == ".parquet":
        frame.write_parquet(path)
    else:
        frame.write_ndjson(path)
    _LOGGER.info("Wrote frame", path=str(path), rows=frame.height)
    return path.resolve()


def generate_metadata(processing_stats: dict, config_used: dict) -> dict:
    """Return a metadata document describing the processing run."""

    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "stats": dict(processing_stats),
        "config": dict(config_used),
    }


__all__ = [
    "SUPPORTED_SUFFIXES",
    "load_text_corpus",
    "write_frame",
    "generate_metadata",
]
