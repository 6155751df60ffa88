"""Procedure-header parser.

The procedure name has no distinctive internal shape, only distinctive
boundaries: it opens the header with an upper-case keyword and ends at a
terminator such as ``under``.  The parser therefore isolates the span up to
the first terminator and then refines it.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from lexnorm.config.policies import ProcedurePolicy
from lexnorm.patterns import (
    Pipeline,
    extract_first_step,
    remove_first_step,
    squish_step,
    transform_step,
    validate_step,
)
from lexnorm.patterns.batch import apply_batch
from lexnorm.utils.helpers import to_sentence_case

from .models import ProcedureHeader


def build_procedure_pipeline(policy: ProcedurePolicy) -> Pipeline:
    names = "|".join(re.escape(name) for name in policy.procedure_names)
    terminator = policy.terminator
    return Pipeline(
        name="procedure",
        steps=(
            extract_first_step(rf"^(?:{names})\b.*?(?:{terminator})", name="isolate"),
            remove_first_step(rf"\s*(?:{terminator})$", name="strip_terminator"),
            squish_step(),
            validate_step(r"\S(?:.*\S)?", expectation="a non-empty procedure name", name="non_empty"),
            transform_step(to_sentence_case, name="sentence_case"),
        ),
    )


class ProcedureHeaderParser:
    def __init__(self, policy: ProcedurePolicy | None = None) -> None:
        self._policy = policy or ProcedurePolicy()
        self._pipeline = build_procedure_pipeline(self._policy)

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    def parse(self, text: str) -> ProcedureHeader | None:
        result = self._pipeline.trace(text)
        if result.value is None:
            return None
        _, isolated = result.trace[0]
        return ProcedureHeader(name=result.value, raw=isolated)

    def parse_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[ProcedureHeader]]:
        return apply_batch(self.parse, texts, max_workers=max_workers, label="procedure")


__all__ = ["ProcedureHeaderParser", "build_procedure_pipeline"]
