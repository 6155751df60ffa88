"""Configuration utilities for lexnorm."""

from .policies import (
    BatchPolicy,
    CaseNumberPolicy,
    DatePolicy,
    JudgeRosterPolicy,
    Policies,
    ProcedurePolicy,
    StopWordPolicy,
    load_policies,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "Policies",
    "load_policies",
    "CaseNumberPolicy",
    "ProcedurePolicy",
    "JudgeRosterPolicy",
    "StopWordPolicy",
    "DatePolicy",
    "BatchPolicy",
]
