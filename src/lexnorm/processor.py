"""Coordinator that attaches every normalized field to a corpus frame.

Each derived column holds exactly one value per input row; rows where a field
cannot be resolved hold a null.  Rows are never filtered, grouped or joined.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import polars as pl

from lexnorm.fields import FieldNormalizers, prepare_text
from lexnorm.frames import attach_values, column_values
from lexnorm.patterns import PipelineResult, ShapeViolation
from lexnorm.patterns.batch import apply_batch
from lexnorm.utils.logging import get_logger, log_timing


@dataclass
class ProcessingMetrics:
    """Counters tracked for observability and testing."""

    rows_in: int = 0
    roster_rows: int = 0
    missing: Dict[str, int] = field(default_factory=dict)
    violations: List[ShapeViolation] = field(default_factory=list)

    @property
    def shape_violations(self) -> int:
        return len(self.violations)

    def as_dict(self) -> dict:
        return {
            "rows_in": self.rows_in,
            "roster_rows": self.roster_rows,
            "missing": dict(self.missing),
            "shape_violations": self.shape_violations,
        }


@dataclass(frozen=True)
class ProcessingResult:
    frame: pl.DataFrame
    metrics: ProcessingMetrics


class CorpusProcessor:
    """Run every field normalizer over the text column of a frame."""

    def __init__(
        self,
        normalizers: FieldNormalizers,
        *,
        text_column: str = "text",
        max_workers: int = 1,
    ) -> None:
        self._normalizers = normalizers
        self._text_column = text_column
        self._max_workers = max_workers
        self._log = get_logger(module=__name__)

    def _batch(self, func, texts: List[Optional[str]], label: str) -> list:
        return apply_batch(func, texts, max_workers=self._max_workers, label=label)

    def process(self, frame: pl.DataFrame) -> ProcessingResult:
        texts = column_values(frame, self._text_column)
        metrics = ProcessingMetrics(rows_in=len(texts))
        fields = self._normalizers

        with log_timing("corpus_processing", logger_=self._log):
            case_numbers = self._batch(fields.case_number.parse, texts, "case_number")
            procedures = self._batch(fields.procedure.parse, texts, "procedure")
            dates = self._batch(fields.dates.extract_all, texts, "dates")
            cleaned = self._batch(prepare_text, texts, "clean_text")

            is_roster = [bool(flag) for flag in self._batch(fields.judges.is_roster, texts, "is_roster")]
            roster_texts = [text if flag else None for text, flag in zip(texts, is_roster)]
            traces: List[Optional[PipelineResult]] = self._batch(
                fields.judges.trace, roster_texts, "judge_roster"
            )
            rosters = [fields.judges.roster_from(trace) if trace else None for trace in traces]
            rapporteurs = self._batch(fields.judges.extract_rapporteur, roster_texts, "judge_rapporteur")

        metrics.roster_rows = sum(is_roster)
        metrics.violations = [trace.violation for trace in traces if trace and trace.violation]
        metrics.missing = {
            "case_number": sum(1 for value in case_numbers if value is None),
            "procedure": sum(1 for value in procedures if value is None),
            "dates": sum(1 for value in dates if not value),
            "judges": sum(1 for flag, value in zip(is_roster, rosters) if flag and value is None),
            "judge_rapporteur": sum(
                1 for flag, value in zip(is_roster, rapporteurs) if flag and value is None
            ),
        }

        result = frame
        result = attach_values(
            result,
            "case_number",
            [value.format() if value else None for value in case_numbers],
            dtype=pl.Utf8,
        )
        result = attach_values(
            result, "case_prefix", [value.prefix if value else None for value in case_numbers], dtype=pl.Utf8
        )
        result = attach_values(
            result, "case_serial", [value.number if value else None for value in case_numbers], dtype=pl.Int64
        )
        result = attach_values(
            result, "case_year", [value.year if value else None for value in case_numbers], dtype=pl.Int64
        )
        result = attach_values(
            result, "procedure", [value.name if value else None for value in procedures], dtype=pl.Utf8
        )
        result = attach_values(
            result,
            "dates",
            [list(value) if value is not None else None for value in dates],
            dtype=pl.List(pl.Date),
        )
        result = attach_values(
            result,
            "judges",
            [list(value.names) if value else None for value in rosters],
            dtype=pl.List(pl.Utf8),
        )
        result = attach_values(result, "judge_rapporteur", rapporteurs, dtype=pl.Utf8)
        result = attach_values(result, "clean_text", cleaned, dtype=pl.Utf8)

        for violation in metrics.violations:
            self._log.warning("Shape violation", detail=violation.describe())
        self._log.info("Processed corpus", **metrics.as_dict())
        return ProcessingResult(frame=result, metrics=metrics)


__all__ = ["CorpusProcessor", "ProcessingMetrics", "ProcessingResult"]
