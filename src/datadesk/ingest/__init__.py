"""Input adapters that normalize raw roster and admissions data."""

from .admissions import (
    admissions_from_rows,
    directory_from_rows,
    load_admissions_csv,
    load_directory_csv,
    parse_admissions_csv,
    parse_directory_csv,
)
from .education_api import EducationDataClient
from .roster import (
    DEFAULT_CONTINENT_MAPPING,
    DEFAULT_ROSTER_MAPPING,
    RosterRow,
    load_continent_csv,
    load_roster_csv,
    parse_continent_csv,
    parse_roster_csv,
    rows_to_players,
)

__all__ = [
    "admissions_from_rows",
    "directory_from_rows",
    "load_admissions_csv",
    "load_directory_csv",
    "parse_admissions_csv",
    "parse_directory_csv",
    "EducationDataClient",
    "DEFAULT_CONTINENT_MAPPING",
    "DEFAULT_ROSTER_MAPPING",
    "RosterRow",
    "load_continent_csv",
    "load_roster_csv",
    "parse_continent_csv",
    "parse_roster_csv",
    "rows_to_players",
]
