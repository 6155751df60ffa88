"""Field normalizers composed from the pattern primitives."""

from __future__ import annotations

from dataclasses import dataclass

from lexnorm.config.policies import Policies

from .case_number import CaseNumberParser
from .dates import DateExtractor
from .judges import JudgeRosterParser, build_rapporteur_pipeline, build_roster_pipeline
from .models import CaseNumber, FieldRecord, JudgeRoster, ProcedureHeader
from .procedure import ProcedureHeaderParser, build_procedure_pipeline
from .stopwords import StopWordStripper
from .text import TEXT_PIPELINE, prepare_text


@dataclass(frozen=True)
class FieldNormalizers:
    """Every normalizer configured from one :class:`Policies` instance."""

    case_number: CaseNumberParser
    procedure: ProcedureHeaderParser
    judges: JudgeRosterParser
    dates: DateExtractor
    stop_words: StopWordStripper

    @classmethod
    def from_policies(cls, policies: Policies) -> "FieldNormalizers":
        return cls(
            case_number=CaseNumberParser(policies.case_number),
            procedure=ProcedureHeaderParser(policies.procedure),
            judges=JudgeRosterParser(policies.judges),
            dates=DateExtractor(policies.dates),
            stop_words=StopWordStripper(policy=policies.stop_words),
        )


__all__ = [
    "FieldNormalizers",
    "CaseNumberParser",
    "DateExtractor",
    "JudgeRosterParser",
    "ProcedureHeaderParser",
    "StopWordStripper",
    "CaseNumber",
    "FieldRecord",
    "JudgeRoster",
    "ProcedureHeader",
    "TEXT_PIPELINE",
    "prepare_text",
    "build_procedure_pipeline",
    "build_rapporteur_pipeline",
    "build_roster_pipeline",
]
