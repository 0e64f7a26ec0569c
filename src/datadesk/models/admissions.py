"""Canonical admissions models used by the competitiveness pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class InstitutionControl(str, Enum):
    PUBLIC = "Public"
    PRIVATE_NONPROFIT = "Private nonprofit"
    PRIVATE_FOR_PROFIT = "Private for-profit"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: object) -> "InstitutionControl":
        """Decode an IPEDS ``inst_control`` value (1/2/3) or a label."""

        if isinstance(code, InstitutionControl):
            return code
        text = str(code).strip() if code is not None else ""
        if text in _CONTROL_CODES:
            return _CONTROL_CODES[text]
        lowered = text.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return cls.UNKNOWN


_CONTROL_CODES = {
    "1": InstitutionControl.PUBLIC,
    "2": InstitutionControl.PRIVATE_NONPROFIT,
    "3": InstitutionControl.PRIVATE_FOR_PROFIT,
}


class AdmissionsRecord(BaseModel):
    """Total (all sexes, full- and part-time) admissions figures for one institution-year."""

    institution_id: int
    year: int
    number_applied: Optional[float] = Field(default=None, ge=0.0)
    number_enrolled: Optional[float] = Field(default=None, ge=0.0)
    institution_control: InstitutionControl = InstitutionControl.UNKNOWN

    model_config = ConfigDict(frozen=True)


class DirectoryRecord(BaseModel):
    institution_id: int
    year: int
    institution_name: str
    institution_control: InstitutionControl = InstitutionControl.UNKNOWN

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class DerivedRatio:
    institution_id: int
    year: int
    ratio: float
    institution_name: str
    institution_control: InstitutionControl
    number_applied: float
    number_enrolled: float


@dataclass(frozen=True)
class IndexedSeries:
    """One group-year point of a series indexed to the group's base year (=100)."""

    group_key: str
    year: int
    raw_value: float
    base_year: int
    base_year_value: float
    index: float
