import pytest

from datadesk.config import (
    DEFAULT_CONTINENT_OVERRIDES,
    Continent,
    ContinentLookup,
    get_continent_color,
    iter_palette,
    name_token,
    parse_continent,
)


def test_name_token_ignores_case_accents_and_punctuation():
    assert name_token("Côte d'Ivoire") == name_token("cote divoire")
    assert name_token("  Korea Republic ") == "korearepublic"


def test_parse_continent_aliases():
    assert parse_continent("Europe") is Continent.EUROPE
    assert parse_continent("south america") is Continent.AMERICAS
    assert parse_continent("North America") is Continent.AMERICAS
    assert parse_continent("Atlantis") is Continent.UNKNOWN
    assert parse_continent(None) is Continent.UNKNOWN


def test_lookup_resolves_normalized_names():
    lookup = ContinentLookup.from_pairs([("Brazil", "Americas"), ("Iceland", "Europe")])

    assert lookup.resolve("BRAZIL") is Continent.AMERICAS
    assert "iceland" in lookup
    assert len(lookup) == 2


def test_lookup_miss_maps_to_unknown():
    lookup = ContinentLookup.from_pairs([("Brazil", "Americas")])

    assert lookup.resolve("Wakanda") is Continent.UNKNOWN


def test_overrides_take_precedence_over_lookup():
    lookup = ContinentLookup.from_pairs([("United Kingdom", "Europe"), ("Australia", "Oceania")])

    assert lookup.resolve("England") is Continent.UNKNOWN
    assert lookup.resolve("England", DEFAULT_CONTINENT_OVERRIDES) is Continent.EUROPE
    assert lookup.resolve("Australia", {"Australia": Continent.ASIA}) is Continent.ASIA


def test_every_continent_has_a_colour():
    colours = dict(iter_palette())
    for continent in Continent:
        assert get_continent_color(continent) == colours[continent]


def test_get_continent_color_missing_raises():
    with pytest.raises(KeyError):
        get_continent_color("Antarctica")  # type: ignore[arg-type]


def test_continent_lookup_is_read_only_and_hashable():
    source = {"Brazil": Continent.AMERICAS}
    lookup = ContinentLookup(source)
    source["Iceland"] = Continent.EUROPE

    assert "Iceland" not in lookup
    with pytest.raises(TypeError):
        lookup.entries["Iceland"] = Continent.EUROPE  # type: ignore[index]

    same = ContinentLookup.from_pairs([("brazil", "Americas")])
    assert lookup == same
    assert hash(lookup) == hash(same)
    assert len({lookup, same, ContinentLookup()}) == 2
