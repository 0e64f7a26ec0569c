"""Reference tables and display settings."""

from .continents import (
    CLUB_STYLE,
    DEFAULT_CONTINENT_OVERRIDES,
    NATIONAL_TEAM_SIZE,
    Continent,
    ContinentLookup,
    get_continent_color,
    iter_palette,
    name_token,
    parse_continent,
)

__all__ = [
    "CLUB_STYLE",
    "DEFAULT_CONTINENT_OVERRIDES",
    "NATIONAL_TEAM_SIZE",
    "Continent",
    "ContinentLookup",
    "get_continent_color",
    "iter_palette",
    "name_token",
    "parse_continent",
]
