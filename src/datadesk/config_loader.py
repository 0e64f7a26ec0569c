"""Persist and load CLI column profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from datadesk.config import Continent, parse_continent


@dataclass
class ColumnProfile:
    roster_mapping: Dict[str, str] = field(default_factory=dict)
    continent_mapping: Dict[str, str] = field(default_factory=dict)
    continent_overrides: Dict[str, Continent] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ColumnProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        overrides = data.get("continent_overrides", {})
        return cls(
            roster_mapping=data.get("roster_mapping", {}),
            continent_mapping=data.get("continent_mapping", {}),
            continent_overrides={name: parse_continent(label) for name, label in overrides.items()},
        )

    def save(self, path: Path) -> None:
        payload = {
            "roster_mapping": self.roster_mapping,
            "continent_mapping": self.continent_mapping,
            "continent_overrides": {
                name: continent.value for name, continent in self.continent_overrides.items()
            },
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
