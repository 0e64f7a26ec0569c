"""Continent reference data, overrides and display palette for roster graphs."""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)


class Continent(str, Enum):
    ASIA = "Asia"
    EUROPE = "Europe"
    AFRICA = "Africa"
    OCEANIA = "Oceania"
    AMERICAS = "Americas"
    UNKNOWN = "Unknown"


_CONTINENT_ALIASES: Dict[str, Continent] = {
    "asia": Continent.ASIA,
    "europe": Continent.EUROPE,
    "africa": Continent.AFRICA,
    "oceania": Continent.OCEANIA,
    "australia": Continent.OCEANIA,
    "americas": Continent.AMERICAS,
    "america": Continent.AMERICAS,
    "northamerica": Continent.AMERICAS,
    "southamerica": Continent.AMERICAS,
    "centralamerica": Continent.AMERICAS,
    "unknown": Continent.UNKNOWN,
}

# The reference continent table lists sovereign states; football associations
# that are not sovereign states need an explicit entry.
DEFAULT_CONTINENT_OVERRIDES: Mapping[str, Continent] = {
    "England": Continent.EUROPE,
}


@dataclass(frozen=True)
class NodeStyle:
    color: str
    size: float


CLUB_STYLE = NodeStyle(color="#c7c7c7", size=10.0)
NATIONAL_TEAM_SIZE = 30.0

_CONTINENT_PALETTE: Dict[Continent, str] = {
    Continent.ASIA: "#ff7f0e",
    Continent.EUROPE: "#1f77b4",
    Continent.AFRICA: "#2ca02c",
    Continent.OCEANIA: "#9467bd",
    Continent.AMERICAS: "#d62728",
    Continent.UNKNOWN: "#7f7f7f",
}


def name_token(value: str) -> str:
    """Fold case, accents and punctuation so names from different sources compare equal."""

    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]", "", stripped.casefold())


def parse_continent(label: Optional[str]) -> Continent:
    if not label:
        return Continent.UNKNOWN
    continent = _CONTINENT_ALIASES.get(name_token(label))
    if continent is None:
        logger.warning("Unrecognised continent label %r; using %s", label, Continent.UNKNOWN.value)
        return Continent.UNKNOWN
    return continent


def get_continent_color(continent: Continent) -> str:
    """Fetch the palette colour for a continent, raising KeyError if missing."""

    if continent not in _CONTINENT_PALETTE:
        raise KeyError(f"No palette colour configured for continent={continent!r}")
    return _CONTINENT_PALETTE[continent]


def iter_palette() -> Iterable[Tuple[Continent, str]]:
    return _CONTINENT_PALETTE.items()


@dataclass(frozen=True, eq=False)
class ContinentLookup:
    """Country -> continent reference table keyed by normalised country name.

    Entries are stored read-only; equality and hashing use the normalised table.
    """

    entries: Mapping[str, Continent] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))
        normalized: Dict[str, Continent] = {}
        for country, continent in self.entries.items():
            key = name_token(country)
            if not key:
                continue
            if key in normalized and normalized[key] != continent:
                logger.warning(
                    "Conflicting continents for %r (%s vs %s); keeping the first",
                    country,
                    normalized[key].value,
                    continent.value,
                )
                continue
            normalized.setdefault(key, continent)
        object.__setattr__(self, "_normalized", MappingProxyType(normalized))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "ContinentLookup":
        return cls({country: parse_continent(label) for country, label in pairs})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContinentLookup):
            return NotImplemented
        return self._normalized == other._normalized

    def __hash__(self) -> int:
        return hash(frozenset(self._normalized.items()))

    def __len__(self) -> int:
        return len(self._normalized)

    def __contains__(self, country: object) -> bool:
        return isinstance(country, str) and name_token(country) in self._normalized

    def get(self, country: str) -> Optional[Continent]:
        return self._normalized.get(name_token(country))

    def resolve(
        self,
        country: str,
        overrides: Optional[Mapping[str, Continent]] = None,
    ) -> Continent:
        """Resolve a country, consulting ``overrides`` first; misses map to Unknown."""

        if overrides:
            token = name_token(country)
            for name, continent in overrides.items():
                if name_token(name) == token:
                    return continent
        continent = self.get(country)
        if continent is None:
            logger.debug("No continent for %r; using %s", country, Continent.UNKNOWN.value)
            return Continent.UNKNOWN
        return continent
