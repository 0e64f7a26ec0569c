from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel


class RatioResponse(BaseModel):
    institution_id: int
    institution_name: str
    institution_control: str
    year: int
    number_applied: float
    number_enrolled: float
    ratio: float


class IndexPointResponse(BaseModel):
    group_key: str
    year: int
    raw_value: float
    base_year: int
    base_year_value: float
    index: float


class IndexResponse(BaseModel):
    group_by: Literal["institution_control", "institution_name"]
    metric: Literal["enrolled", "applied", "applicants_per_enrollment"]
    series: List[IndexPointResponse]
