"""Immutable field records produced by the normalizers."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class FieldRecord(BaseModel):
    """Base for field values; records are snapshots and never mutated."""

    model_config = ConfigDict(frozen=True)


class CaseNumber(FieldRecord):
    """Structured ``<prefix>-<number>/<year>`` case number.

    ``year`` keeps the digits as written (``12`` stays ``12``) and
    ``year_digits`` records their width so :meth:`format` can restore it.
    """

    prefix: str = Field(..., min_length=1, max_length=1)
    number: int = Field(..., ge=0)
    year: int = Field(..., ge=0)
    year_digits: int = Field(default=2, ge=1, le=4)

    def format(self) -> str:
        """Rebuild ``C-370/12``; leading zeros of the serial number are not kept."""

        return f"{self.prefix}-{self.number}/{self.year:0{self.year_digits}d}"

    def __str__(self) -> str:
        return self.format()


class ProcedureHeader(FieldRecord):
    name: str = Field(..., min_length=1)
    raw: str = Field(..., min_length=1, description="Isolated header before refinement")


class JudgeRoster(FieldRecord):
    """Ordered surnames of a judicial panel."""

    names: Tuple[str, ...] = ()
    raw: str = ""

    def joined(self, separator: str = ", ") -> str:
        return separator.join(self.names)


__all__ = ["FieldRecord", "CaseNumber", "ProcedureHeader", "JudgeRoster"]
