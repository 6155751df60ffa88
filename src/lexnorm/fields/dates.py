"""Extraction of ``<day> <month-name> <year>`` dates such as ``31 July 2012``."""

from __future__ import annotations

import re
from datetime import date
from typing import Iterable, List, Optional, Tuple

from lexnorm.config.policies import DatePolicy
from lexnorm.patterns import Match, Pattern, compile_pattern, find_matches
from lexnorm.patterns.batch import apply_batch
from lexnorm.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


class DateExtractor:
    """Find written-out dates and convert them to :class:`datetime.date`.

    Matches naming an impossible calendar day (``30 February 2012``) are
    skipped rather than reported.
    """

    def __init__(self, policy: DatePolicy | None = None) -> None:
        self._policy = policy or DatePolicy()
        self._months = {name: index for index, name in enumerate(self._policy.months, start=1)}
        alternation = "|".join(re.escape(name) for name in self._policy.months)
        self._pattern = compile_pattern(rf"\b(\d{{1,2}}) ({alternation}) (\d{{4}})\b")

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    def _to_date(self, match: Match) -> date | None:
        day, month, year = match.groups
        try:
            return date(int(year), self._months[month], int(day))
        except ValueError:
            _LOGGER.debug("Skipping impossible date", text=match.text)
            return None

    def extract_all(self, text: str) -> Tuple[date, ...]:
        """Return every valid date in *text* in order of appearance."""

        converted = (self._to_date(match) for match in find_matches(self._pattern, text))
        return tuple(value for value in converted if value is not None)

    def extract_first(self, text: str) -> date | None:
        dates = self.extract_all(text)
        return dates[0] if dates else None

    def extract_all_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[Tuple[date, ...]]]:
        return apply_batch(self.extract_all, texts, max_workers=max_workers, label="dates")


__all__ = ["DateExtractor"]
