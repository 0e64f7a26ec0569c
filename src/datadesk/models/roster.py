"""Roster and graph models shared across ingestion, graph and export layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from datadesk.config.continents import Continent


class PlayerRecord(BaseModel):
    """One squad entry: a player, the national team and the club they play for."""

    player_name: str
    national_team: str = Field(..., min_length=1)
    club: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)


class NodeCategory(str, Enum):
    NATIONAL_TEAM = "national_team"
    CLUB = "club"


@dataclass(frozen=True)
class GraphNode:
    id: int
    label: str
    category: NodeCategory
    continent: Optional[Continent]
    display_size: float
    display_color: str


@dataclass(frozen=True)
class GraphEdge:
    """Weighted club -> national team link; weight is the number of players."""

    from_id: int
    to_id: int
    weight: int


class GraphConsistencyError(RuntimeError):
    """Raised when an edge references a node id that was never assigned."""


@dataclass(frozen=True)
class RosterGraph:
    nodes: Tuple[GraphNode, ...]
    edges: Tuple[GraphEdge, ...]
    _by_id: Dict[int, GraphNode] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {node.id: node for node in self.nodes})

    def node(self, node_id: int) -> GraphNode:
        try:
            return self._by_id[node_id]
        except KeyError:
            raise GraphConsistencyError(f"node id {node_id} was never assigned") from None

    def find(self, label: str, category: NodeCategory) -> GraphNode:
        for node in self.nodes:
            if node.label == label and node.category == category:
                return node
        raise KeyError(f"No {category.value} node labelled {label!r}")
