from pathlib import Path

import pytest

from datadesk.config import Continent
from datadesk.ingest import (
    RosterRow,
    load_continent_csv,
    load_roster_csv,
    parse_continent_csv,
    parse_roster_csv,
    rows_to_players,
)


def test_load_roster_csv_default_columns(tmp_path: Path):
    roster_csv = tmp_path / "roster.csv"
    roster_csv.write_text(
        "Player,Team,Club\n"
        "Harry Kane , England, Tottenham\n"
        "Hugo Lloris,France,Tottenham\n",
        encoding="utf-8",
    )

    players = load_roster_csv(roster_csv)

    assert len(players) == 2
    assert players[0].player_name == "Harry Kane"
    assert players[0].national_team == "England"
    assert players[0].club == "Tottenham"


def test_parse_roster_csv_custom_mapping_joins_columns():
    text = "first,last,country,team_club\nLionel,Messi,Argentina,Barcelona\n"

    players = parse_roster_csv(
        text,
        mapping={"player_name": "first|last", "national_team": "country", "club": "team_club"},
    )

    assert players[0].player_name == "Lionel Messi"
    assert players[0].national_team == "Argentina"


def test_parse_roster_csv_skips_rows_without_club():
    text = "Player,Team,Club\nA,Peru,\nB,Peru,Alianza Lima\n"

    players = parse_roster_csv(text)

    assert [p.player_name for p in players] == ["B"]


def test_parse_roster_csv_missing_column_raises():
    with pytest.raises(ValueError, match="missing required columns"):
        parse_roster_csv("Player,Team\nA,Peru\n")


def test_rows_to_players_from_mapping():
    row = RosterRow.from_mapping({"P": "Son", "T": "Korea Republic", "C": "Tottenham"}, {
        "player_name": "P",
        "national_team": "T",
        "club": "C",
    })

    players = rows_to_players([row])

    assert players[0].club == "Tottenham"


def test_load_continent_csv(tmp_path: Path):
    continents_csv = tmp_path / "continents.csv"
    continents_csv.write_text(
        "country,continent\nBrazil,Americas\nJapan,Asia\nAustralia,Oceania\n,Europe\n",
        encoding="utf-8",
    )

    lookup = load_continent_csv(continents_csv)

    assert len(lookup) == 3
    assert lookup.resolve("Japan") is Continent.ASIA
    assert lookup.resolve("England") is Continent.UNKNOWN


def test_parse_continent_csv_custom_mapping():
    lookup = parse_continent_csv(
        "name,region\nSenegal,Africa\n",
        mapping={"country": "name", "continent": "region"},
    )

    assert lookup.resolve("senegal") is Continent.AFRICA


def test_parse_roster_csv_partial_mapping_keeps_default_columns():
    text = "Player,Team,Club Name\nA,Peru,Alianza Lima\nB,Peru,Alianza Lima\n"

    players = parse_roster_csv(text, mapping={"club": "Club Name"})

    assert [(p.player_name, p.national_team, p.club) for p in players] == [
        ("A", "Peru", "Alianza Lima"),
        ("B", "Peru", "Alianza Lima"),
    ]


def test_parse_continent_csv_partial_mapping_keeps_default_columns():
    lookup = parse_continent_csv("name,continent\nSenegal,Africa\n", mapping={"country": "name"})

    assert lookup.resolve("Senegal") is Continent.AFRICA
