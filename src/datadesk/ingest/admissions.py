"""Normalize IPEDS admissions and directory rows (CSV or API results)."""

from __future__ import annotations

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from datadesk.models import AdmissionsRecord, DirectoryRecord, InstitutionControl


logger = logging.getLogger(__name__)

# IPEDS code for "all" in the demographic breakdown columns.
TOTAL_CODE = 99
DEMOGRAPHIC_COLUMNS = ("sex", "ftpt")

# IPEDS marks missing/not-applicable/suppressed values with negative codes.
_MISSING_CODES = {-1, -2, -3}


def _parse_count(value: Any) -> Optional[float]:
    if value is None:
        return None
    text = str(value).strip().replace(",", "")
    if not text or text.upper() in {"NA", "N/A", "NULL", "."}:
        return None
    try:
        number = float(text)
    except ValueError:
        raise ValueError(f"count '{value}' is not numeric") from None
    if number in _MISSING_CODES:
        return None
    if number < 0:
        raise ValueError(f"count '{value}' is negative")
    return number


def _parse_int(value: Any, *, name: str) -> int:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError(f"{name} is missing")
    try:
        return int(float(text))
    except ValueError:
        raise ValueError(f"{name} '{value}' is not an integer") from None


def _is_total_slice(row: Mapping[str, Any]) -> bool:
    for column in DEMOGRAPHIC_COLUMNS:
        value = row.get(column)
        if value is None or str(value).strip() == "":
            continue
        try:
            if int(float(str(value))) != TOTAL_CODE:
                return False
        except ValueError:
            if str(value).strip().lower() != "total":
                return False
    return True


def admissions_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[AdmissionsRecord]:
    """Keep the "Total" demographic slice of each row and build admissions records."""

    records: List[AdmissionsRecord] = []
    dropped = 0
    for row in rows:
        if not _is_total_slice(row):
            dropped += 1
            continue
        enrolled = row.get("number_enrolled_total")
        if enrolled is None:
            enrolled = row.get("number_enrolled")
        records.append(
            AdmissionsRecord(
                institution_id=_parse_int(row.get("unitid"), name="unitid"),
                year=_parse_int(row.get("year"), name="year"),
                number_applied=_parse_count(row.get("number_applied")),
                number_enrolled=_parse_count(enrolled),
                institution_control=InstitutionControl.from_code(row.get("inst_control")),
            )
        )
    if dropped:
        logger.debug("Dropped %s non-total admissions rows", dropped)
    return records


def directory_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[DirectoryRecord]:
    return [
        DirectoryRecord(
            institution_id=_parse_int(row.get("unitid"), name="unitid"),
            year=_parse_int(row.get("year"), name="year"),
            institution_name=str(row.get("inst_name") or "").strip(),
            institution_control=InstitutionControl.from_code(row.get("inst_control")),
        )
        for row in rows
    ]


def parse_admissions_csv(text: str) -> List[AdmissionsRecord]:
    return admissions_from_rows(csv.DictReader(StringIO(text)))


def parse_directory_csv(text: str) -> List[DirectoryRecord]:
    return directory_from_rows(csv.DictReader(StringIO(text)))


def load_admissions_csv(path: Path) -> List[AdmissionsRecord]:
    return parse_admissions_csv(path.read_text(encoding="utf-8-sig"))


def load_directory_csv(path: Path) -> List[DirectoryRecord]:
    return parse_directory_csv(path.read_text(encoding="utf-8-sig"))
