"""Build the club -> national team graph from a squad roster."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from datadesk.config import (
    CLUB_STYLE,
    DEFAULT_CONTINENT_OVERRIDES,
    NATIONAL_TEAM_SIZE,
    Continent,
    ContinentLookup,
    get_continent_color,
)
from datadesk.models import (
    GraphConsistencyError,
    GraphEdge,
    GraphNode,
    NodeCategory,
    PlayerRecord,
    RosterGraph,
)


logger = logging.getLogger(__name__)

FIRST_NODE_ID = 1

NodeKey = Tuple[NodeCategory, str]


def _assign_nodes(
    clubs: Sequence[str],
    teams: Sequence[str],
    continent_lookup: ContinentLookup,
    overrides: Mapping[str, Continent],
) -> List[GraphNode]:
    nodes: List[GraphNode] = []
    next_id = FIRST_NODE_ID
    for club in clubs:
        nodes.append(
            GraphNode(
                id=next_id,
                label=club,
                category=NodeCategory.CLUB,
                continent=None,
                display_size=CLUB_STYLE.size,
                display_color=CLUB_STYLE.color,
            )
        )
        next_id += 1

    for team in teams:
        continent = continent_lookup.resolve(team, overrides)
        nodes.append(
            GraphNode(
                id=next_id,
                label=team,
                category=NodeCategory.NATIONAL_TEAM,
                continent=continent,
                display_size=NATIONAL_TEAM_SIZE,
                display_color=get_continent_color(continent),
            )
        )
        next_id += 1
    return nodes


def _node_id(ids: Mapping[NodeKey, int], category: NodeCategory, label: str) -> int:
    try:
        return ids[(category, label)]
    except KeyError:
        raise GraphConsistencyError(
            f"{category.value} {label!r} has no assigned node id"
        ) from None


def build_roster_graph(
    players: Sequence[PlayerRecord],
    continent_lookup: ContinentLookup,
    overrides: Optional[Mapping[str, Continent]] = None,
) -> RosterGraph:
    """Turn roster rows into club and national team nodes joined by weighted edges.

    Clubs take ids first, then national teams, each in alphabetical order and
    starting at ``FIRST_NODE_ID``, so identical rosters always get identical ids.
    ``overrides`` (default ``DEFAULT_CONTINENT_OVERRIDES``) win over the lookup.
    """

    if overrides is None:
        overrides = DEFAULT_CONTINENT_OVERRIDES

    clubs = sorted({player.club for player in players})
    teams = sorted({player.national_team for player in players})
    nodes = _assign_nodes(clubs, teams, continent_lookup, overrides)
    ids: Dict[NodeKey, int] = {(node.category, node.label): node.id for node in nodes}

    pair_counts = Counter((player.club, player.national_team) for player in players)
    edges = [
        GraphEdge(
            from_id=_node_id(ids, NodeCategory.CLUB, club),
            to_id=_node_id(ids, NodeCategory.NATIONAL_TEAM, team),
            weight=count,
        )
        for (club, team), count in pair_counts.items()
    ]
    edges.sort(key=lambda edge: (edge.from_id, edge.to_id))

    graph = RosterGraph(nodes=tuple(nodes), edges=tuple(edges))
    validate_graph(graph)

    unknown = [
        node.label
        for node in graph.nodes
        if node.category is NodeCategory.NATIONAL_TEAM and node.continent is Continent.UNKNOWN
    ]
    if unknown:
        logger.info("National teams without a continent: %s", ", ".join(unknown))
    logger.info(
        "Built roster graph: %s clubs, %s national teams, %s edges from %s players",
        len(clubs),
        len(teams),
        len(edges),
        len(players),
    )
    return graph


def validate_graph(graph: RosterGraph) -> None:
    """Raise GraphConsistencyError unless every edge joins a club to a national team."""

    seen: set[tuple[int, int]] = set()
    for edge in graph.edges:
        source = graph.node(edge.from_id)
        target = graph.node(edge.to_id)
        if source.category is not NodeCategory.CLUB:
            raise GraphConsistencyError(f"edge source {edge.from_id} is not a club node")
        if target.category is not NodeCategory.NATIONAL_TEAM:
            raise GraphConsistencyError(f"edge target {edge.to_id} is not a national team node")
        if edge.weight < 1:
            raise GraphConsistencyError(
                f"edge {edge.from_id}->{edge.to_id} has non-positive weight {edge.weight}"
            )
        if (edge.from_id, edge.to_id) in seen:
            raise GraphConsistencyError(f"duplicate edge {edge.from_id}->{edge.to_id}")
        seen.add((edge.from_id, edge.to_id))
