"""Helpers to load roster and continent CSVs into canonical records."""

from __future__ import annotations

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from datadesk.config import ContinentLookup
from datadesk.models import PlayerRecord


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "player_name": "Player",
    "national_team": "Team",
    "club": "Club",
}

DEFAULT_CONTINENT_MAPPING = {
    "country": "country",
    "continent": "continent",
}


def _extract(row: Mapping[str, Optional[str]], spec: Optional[str | Sequence[str]]) -> str:
    if spec is None:
        return ""
    if isinstance(spec, str):
        value = row.get(spec)
        return value.strip() if value is not None else ""
    parts = [(row.get(col) or "").strip() for col in spec]
    return " ".join(part for part in parts if part)


def _parse_spec(mapping: Mapping[str, str], key: str) -> Optional[str | Sequence[str]]:
    spec = mapping.get(key)
    if spec is None:
        return None
    if "|" in spec:
        return tuple(part.strip() for part in spec.split("|"))
    return spec


class RosterRow(BaseModel):
    raw_player: str
    raw_team: str
    raw_club: str

    @classmethod
    def from_mapping(cls, row: Mapping[str, Optional[str]], mapping: Mapping[str, str]) -> "RosterRow":
        return cls(
            raw_player=_extract(row, _parse_spec(mapping, "player_name")),
            raw_team=_extract(row, _parse_spec(mapping, "national_team")),
            raw_club=_extract(row, _parse_spec(mapping, "club")),
        )


def _check_headers(fieldnames: Optional[Sequence[str]], mapping: Mapping[str, str], *, name: str) -> None:
    headers = set(fieldnames or ())
    missing: List[str] = []
    for key in mapping:
        spec = _parse_spec(mapping, key)
        columns = [spec] if isinstance(spec, str) else list(spec or ())
        missing.extend(col for col in columns if col not in headers)
    if missing:
        raise ValueError(f"{name}: missing required columns: {missing}")


def rows_to_players(rows: Iterable[RosterRow]) -> List[PlayerRecord]:
    players: List[PlayerRecord] = []
    skipped = 0
    for row in rows:
        if not row.raw_team or not row.raw_club:
            skipped += 1
            logger.warning(
                "Skipping roster row for %r without team or club (team=%r, club=%r)",
                row.raw_player,
                row.raw_team,
                row.raw_club,
            )
            continue
        players.append(
            PlayerRecord(player_name=row.raw_player, national_team=row.raw_team, club=row.raw_club)
        )
    if skipped:
        logger.info("Loaded %s roster rows (%s skipped)", len(players), skipped)
    return players


def parse_roster_csv(text: str, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    mapping = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    reader = csv.DictReader(StringIO(text))
    _check_headers(reader.fieldnames, mapping, name="roster")
    return rows_to_players(RosterRow.from_mapping(row, mapping) for row in reader)


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    return parse_roster_csv(path.read_text(encoding="utf-8-sig"), mapping=mapping)


def parse_continent_csv(text: str, *, mapping: Mapping[str, str] | None = None) -> ContinentLookup:
    mapping = {**DEFAULT_CONTINENT_MAPPING, **(mapping or {})}
    reader = csv.DictReader(StringIO(text))
    _check_headers(reader.fieldnames, mapping, name="continents")
    pairs: List[Tuple[str, str]] = []
    for row in reader:
        country = _extract(row, _parse_spec(mapping, "country"))
        if country:
            pairs.append((country, _extract(row, _parse_spec(mapping, "continent"))))
    return ContinentLookup.from_pairs(pairs)


def load_continent_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> ContinentLookup:
    return parse_continent_csv(path.read_text(encoding="utf-8-sig"), mapping=mapping)
