"""Row-for-row attachment of derived columns to polars frames."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

import polars as pl

from lexnorm.patterns.batch import apply_batch


def column_values(frame: pl.DataFrame, column: str) -> List[Optional[str]]:
    if column not in frame.columns:
        raise ValueError(f"Unknown column {column!r}; available: {frame.columns}")
    return frame.get_column(column).to_list()


def attach_values(
    frame: pl.DataFrame,
    alias: str,
    values: Sequence[Any],
    *,
    dtype: pl.DataType | None = None,
) -> pl.DataFrame:
    """Attach *values* as column *alias*; raises when the length differs from the frame."""

    if len(values) != frame.height:
        raise ValueError(
            f"Column {alias!r} has {len(values)} values for a frame of {frame.height} rows"
        )
    return frame.with_columns(pl.Series(alias, list(values), dtype=dtype))


def attach_column(
    frame: pl.DataFrame,
    source: str,
    alias: str,
    func: Callable[[str], Any],
    *,
    dtype: pl.DataType | None = None,
    max_workers: int = 1,
) -> pl.DataFrame:
    """Apply *func* to every value of *source* and attach the results as *alias*.

    Nulls and values *func* cannot handle become nulls in the new column.
    """

    values = apply_batch(func, column_values(frame, source), max_workers=max_workers, label=alias)
    return attach_values(frame, alias, values, dtype=dtype)


__all__ = ["column_values", "attach_values", "attach_column"]
