"""Case-number parser for ``<prefix>-<number>/<year>`` citations (e.g. ``C-370/12``)."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from lexnorm.config.policies import CaseNumberPolicy
from lexnorm.patterns import (
    Pipeline,
    compile_pattern,
    extract_all,
    extract_first,
    extract_first_step,
    transform_step,
)
from lexnorm.utils.logging import get_logger

from .models import CaseNumber

_FIRST_NUMERAL = compile_pattern(r"\d+")
_TRAILING_NUMERAL = compile_pattern(r"\d+$")


class CaseNumberParser:
    """Isolate a case-number token, then read its fields.

    The prefix is decided by the exact character found in the text, never by
    the order prefixes are configured in.  Years must be written with two or
    four digits; other widths are rejected so that page or paragraph numbers
    after a slash are not mistaken for case numbers.
    """

    def __init__(self, policy: CaseNumberPolicy | None = None) -> None:
        self._policy = policy or CaseNumberPolicy()
        letters = "".join(re.escape(prefix) for prefix in self._policy.prefixes)
        self._token = compile_pattern(rf"\b[{letters}]-\d+/(?:\d{{4}}|\d{{2}})\b")
        self._pipeline = Pipeline(
            name="case_number",
            steps=(
                extract_first_step(self._token, name="isolate"),
                transform_step(self._to_record, name="fields"),
            ),
        )
        self._log = get_logger(module=__name__)

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    @staticmethod
    def _to_record(token: str) -> CaseNumber:
        number = extract_first(_FIRST_NUMERAL, token)
        year = extract_first(_TRAILING_NUMERAL, token)
        return CaseNumber(
            prefix=token[0],
            number=int(number),
            year=int(year),
            year_digits=len(year),
        )

    def parse(self, text: str) -> CaseNumber | None:
        """Return the first case number in *text*, or ``None``."""

        return self._pipeline.run(text)

    def parse_all(self, text: str) -> Tuple[CaseNumber, ...]:
        """Return every case number in *text* in order of appearance."""

        return tuple(self._to_record(token) for token in extract_all(self._token, text))

    def parse_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[CaseNumber]]:
        results = self._pipeline.run_batch(texts, max_workers=max_workers)
        self._log.debug(
            "Parsed case numbers",
            size=len(results),
            missing=sum(1 for value in results if value is None),
        )
        return results


__all__ = ["CaseNumberParser"]
