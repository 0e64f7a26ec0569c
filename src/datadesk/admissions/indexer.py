"""Applicants-per-enrollment ratios and base-year indexed series."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Literal, Sequence, Tuple, Union

from datadesk.models import (
    AdmissionsRecord,
    DerivedRatio,
    DirectoryRecord,
    IndexedSeries,
)


logger = logging.getLogger(__name__)

GroupBy = Literal["institution_control", "institution_name"]
Metric = Literal["enrolled", "applied", "applicants_per_enrollment"]
BaseYearRule = Union[Literal["earliest"], int]

GROUP_BY_CHOICES: Tuple[str, ...] = ("institution_control", "institution_name")
METRIC_CHOICES: Tuple[str, ...] = ("enrolled", "applied", "applicants_per_enrollment")

InstitutionYear = Tuple[int, int]


@dataclass(frozen=True)
class _JoinedRow:
    admissions: AdmissionsRecord
    directory: DirectoryRecord
    applied: float
    enrolled: float


def _directory_index(directory: Sequence[DirectoryRecord]) -> Dict[InstitutionYear, DirectoryRecord]:
    index: Dict[InstitutionYear, DirectoryRecord] = {}
    for entry in directory:
        key = (entry.institution_id, entry.year)
        if key in index:
            logger.warning(
                "Duplicate directory entry for institution %s in %s; keeping the first",
                entry.institution_id,
                entry.year,
            )
            continue
        index[key] = entry
    return index


def _has_valid_ratio(record: AdmissionsRecord) -> bool:
    applied = record.number_applied
    enrolled = record.number_enrolled
    return applied is not None and enrolled is not None and applied > 0 and enrolled > 0


def _join_and_filter(
    admissions: Sequence[AdmissionsRecord],
    directory: Sequence[DirectoryRecord],
) -> List[_JoinedRow]:
    lookup = _directory_index(directory)
    joined: List[_JoinedRow] = []
    join_misses = 0
    invalid = 0
    for record in admissions:
        entry = lookup.get((record.institution_id, record.year))
        if entry is None:
            join_misses += 1
            continue
        if not _has_valid_ratio(record):
            invalid += 1
            continue
        joined.append(
            _JoinedRow(
                admissions=record,
                directory=entry,
                applied=float(record.number_applied),  # type: ignore[arg-type]
                enrolled=float(record.number_enrolled),  # type: ignore[arg-type]
            )
        )
    logger.debug(
        "Joined %s/%s admissions rows (%s without directory entry, %s without a valid ratio)",
        len(joined),
        len(admissions),
        join_misses,
        invalid,
    )
    return joined


def compute_ratios(
    admissions: Sequence[AdmissionsRecord],
    directory: Sequence[DirectoryRecord],
) -> List[DerivedRatio]:
    """Applicants per enrolled student for each institution-year with usable data.

    Admissions rows without a directory entry, and rows where either count is
    missing or zero, are left out rather than zero-filled.
    """

    return [
        DerivedRatio(
            institution_id=row.admissions.institution_id,
            year=row.admissions.year,
            ratio=row.applied / row.enrolled,
            institution_name=row.directory.institution_name,
            institution_control=row.directory.institution_control,
            number_applied=row.applied,
            number_enrolled=row.enrolled,
        )
        for row in _join_and_filter(admissions, directory)
    ]


def _group_key(row: _JoinedRow, group_by: str) -> str:
    if group_by == "institution_control":
        return row.directory.institution_control.value
    return row.directory.institution_name


def _metric_value(applied: float, enrolled: float, metric: str) -> float:
    if metric == "enrolled":
        return enrolled
    if metric == "applied":
        return applied
    return applied / enrolled


def _resolve_base_year(years: Sequence[int], rule: BaseYearRule) -> int | None:
    if rule == "earliest":
        return min(years)
    eligible = [year for year in years if year >= rule]
    return min(eligible) if eligible else None


def compute_index(
    admissions: Sequence[AdmissionsRecord],
    directory: Sequence[DirectoryRecord],
    group_by: GroupBy = "institution_control",
    base_year_rule: BaseYearRule = "earliest",
    *,
    metric: Metric = "enrolled",
) -> List[IndexedSeries]:
    """Sum ``metric`` per (group, year) and index each group to its own base year.

    The base year is the group's earliest year present, or with an integer
    ``base_year_rule`` the earliest present year at or after it. The index is
    exactly 100 at the base year.
    """

    if group_by not in GROUP_BY_CHOICES:
        raise ValueError(f"group_by must be one of {GROUP_BY_CHOICES}, got {group_by!r}")
    if metric not in METRIC_CHOICES:
        raise ValueError(f"metric must be one of {METRIC_CHOICES}, got {metric!r}")
    if base_year_rule != "earliest" and (
        isinstance(base_year_rule, bool) or not isinstance(base_year_rule, int)
    ):
        raise ValueError(f"base_year_rule must be 'earliest' or a year, got {base_year_rule!r}")

    totals: Dict[str, Dict[int, List[float]]] = defaultdict(dict)
    for row in _join_and_filter(admissions, directory):
        bucket = totals[_group_key(row, group_by)].setdefault(row.admissions.year, [0.0, 0.0])
        bucket[0] += row.applied
        bucket[1] += row.enrolled

    series: List[IndexedSeries] = []
    for group in sorted(totals):
        by_year = totals[group]
        base_year = _resolve_base_year(sorted(by_year), base_year_rule)
        if base_year is None:
            logger.warning("Group %r has no data at or after %s; dropping it", group, base_year_rule)
            continue
        base_applied, base_enrolled = by_year[base_year]
        base_value = _metric_value(base_applied, base_enrolled, metric)
        for year in sorted(by_year):
            if year < base_year:
                continue
            applied, enrolled = by_year[year]
            value = _metric_value(applied, enrolled, metric)
            series.append(
                IndexedSeries(
                    group_key=group,
                    year=year,
                    raw_value=value,
                    base_year=base_year,
                    base_year_value=base_value,
                    index=100.0 if year == base_year else 100.0 * value / base_value,
                )
            )
    return series
