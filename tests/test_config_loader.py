from pathlib import Path

from datadesk.config import Continent
from datadesk.config_loader import ColumnProfile


def test_profile_round_trips_through_json(tmp_path: Path):
    path = tmp_path / "profile.json"
    profile = ColumnProfile(
        roster_mapping={"club": "Club Name"},
        continent_mapping={"country": "name"},
        continent_overrides={"Scotland": Continent.EUROPE},
    )

    profile.save(path)
    loaded = ColumnProfile.load(path)

    assert loaded == profile
    assert '"Scotland": "Europe"' in path.read_text(encoding="utf-8")


def test_profile_load_defaults_missing_sections(tmp_path: Path):
    path = tmp_path / "profile.json"
    path.write_text('{"roster_mapping": {"national_team": "Country"}}', encoding="utf-8")

    profile = ColumnProfile.load(path)

    assert profile.roster_mapping == {"national_team": "Country"}
    assert profile.continent_mapping == {}
    assert profile.continent_overrides == {}
