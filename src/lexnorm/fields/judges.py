"""Judge-roster parser.

Rosters such as ``composed of V. Skouris, President, K. Lenaerts
(Rapporteur), Vice-President, ..., Judges,`` are cleaned by reduction: the
roster is isolated, then structural noise is stripped in a fixed order and
the remainder is split on commas.

Order matters.  Parenthetical annotations and role titles are removed before
initials because the initials patterns would otherwise eat capitals inside
them, and hyphenated initials (``J.-C.``) are removed before single dotted
ones so that no stray hyphen is left behind.  Each stage that a later stage
depends on is followed by a shape check; a failed check yields no result and
a recorded :class:`~lexnorm.patterns.errors.ShapeViolation`.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from lexnorm.config.policies import JudgeRosterPolicy
from lexnorm.patterns import (
    Pipeline,
    PipelineResult,
    Step,
    compile_pattern,
    detect,
    extract_first_step,
    remove_all_step,
    remove_first_step,
    replace_all_step,
    split_step,
    squish_step,
    validate_step,
)
from lexnorm.patterns.batch import apply_batch
from lexnorm.utils.logging import get_logger

from .models import JudgeRoster

# Initials use [^\W\d_a-z]: any letter except ASCII lower-case, so 'É.' and also 'é.' match.
_NAME = r"[^\W\d_](?:[^,().\d]*[^\W\d_])?"
_RAPPORTEUR = r"\([Rr]apporteure?\)"


def _role_alternation(titles: Iterable[str], patterns: Iterable[str] = ()) -> str:
    ordered = sorted(titles, key=lambda title: (-len(title), title))
    return "|".join([*patterns, *(re.escape(title) for title in ordered)])


def _role_keywords(titles: Iterable[str]) -> List[str]:
    words = {word for title in titles for word in re.split(r"[\s-]+", title) if word[:1].isupper()}
    return sorted(words, key=lambda word: (-len(word), word))


def build_roster_pipeline(policy: JudgeRosterPolicy) -> Pipeline:
    prefix = re.escape(policy.roster_prefix)
    suffix = re.escape(policy.roster_suffix)

    steps: List[Step] = [
        extract_first_step(rf"{prefix}\s.*?{suffix}", name="isolate"),
        remove_first_step(rf"^{prefix}\s+", name="strip_prefix"),
        remove_first_step(rf"{suffix}$", name="strip_suffix"),
        validate_step(
            r"[^()]*(?:\([^()]*\)[^()]*)*",
            expectation="unnested parenthetical annotations",
            name="check_parentheses",
        ),
        remove_all_step(r"\s*\([^()]*\)", separator=" ", name="strip_parentheticals"),
    ]
    if policy.role_titles or policy.role_patterns:
        roles = _role_alternation(policy.role_titles, policy.role_patterns)
        steps.append(
            remove_all_step(rf",\s*(?:{roles})\s*(?=,|$)", separator=" ", name="strip_roles")
        )
    steps.append(replace_all_step(r"\s+and\s+", ", ", name="conjunction"))
    for index, initials in enumerate(policy.initials_patterns, start=1):
        steps.append(remove_all_step(initials, separator=" ", name=f"strip_initials_{index}"))
    # Names may not contain a role keyword; unknown title variants fail the final check.
    keywords = "|".join(re.escape(word) for word in _role_keywords(policy.role_titles))
    no_roles = rf"(?!.*\b(?:{keywords})\b)" if keywords else ""
    steps.extend(
        [
            validate_step(r"[^.]*", expectation="no residual initials", name="check_initials"),
            squish_step(),
            replace_all_step(r"\s*,\s*", ", ", name="normalize_commas"),
            validate_step(
                rf"{no_roles}{_NAME}(?:, {_NAME})*",
                expectation="a comma-separated list of names without role titles",
                name="check_names",
            ),
            split_step(r",", name="split"),
        ]
    )
    return Pipeline(name="judge_roster", steps=tuple(steps))


def build_rapporteur_pipeline() -> Pipeline:
    return Pipeline(
        name="judge_rapporteur",
        steps=(
            extract_first_step(
                r"[^\W\d_a-z]\.? (?:[^\W\d_]|['’ ])+(?:, President of the Chamber)?,? *"
                + _RAPPORTEUR,
                name="isolate",
            ),
            remove_first_step(_RAPPORTEUR, name="strip_marker"),
            remove_first_step(r", President of the Chamber", separator=" ", name="strip_role"),
            remove_first_step(r"^[^\W\d_a-z]\.?", name="strip_initial"),
            remove_all_step(r",", separator=" ", name="strip_commas"),
            squish_step(),
            validate_step(_NAME, expectation="a single name", name="check_name"),
        ),
    )


class JudgeRosterParser:
    """Turn roster paragraphs into ordered surnames."""

    def __init__(self, policy: JudgeRosterPolicy | None = None) -> None:
        self._policy = policy or JudgeRosterPolicy()
        self._roster = build_roster_pipeline(self._policy)
        self._rapporteur = build_rapporteur_pipeline()
        self._opening = compile_pattern(rf"^{re.escape(self._policy.roster_prefix)}\b")
        self._log = get_logger(module=__name__)

    @property
    def pipeline(self) -> Pipeline:
        return self._roster

    def is_roster(self, text: str) -> bool:
        """Return ``True`` when *text* is a roster paragraph."""

        return detect(self._opening, text)

    def trace(self, text: str) -> PipelineResult:
        return self._roster.trace(text)

    @staticmethod
    def roster_from(result: PipelineResult) -> JudgeRoster | None:
        """Build the field record from a traced roster run."""

        if result.value is None:
            return None
        _, isolated = result.trace[0]
        return JudgeRoster(names=result.value, raw=isolated)

    def parse(self, text: str) -> JudgeRoster | None:
        result = self._roster.trace(text)
        if result.violation is not None:
            self._log.warning("Roster rejected", reason=result.violation.describe())
        return self.roster_from(result)

    def extract_rapporteur(self, text: str) -> str | None:
        """Return the surname of the judge marked ``(Rapporteur)``."""

        return self._rapporteur.run(text)

    def parse_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[JudgeRoster]]:
        return apply_batch(self.parse, texts, max_workers=max_workers, label="judge_roster")

    def extract_rapporteur_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[str]]:
        return self._rapporteur.run_batch(texts, max_workers=max_workers)


__all__ = [
    "JudgeRosterParser",
    "build_roster_pipeline",
    "build_rapporteur_pipeline",
]
