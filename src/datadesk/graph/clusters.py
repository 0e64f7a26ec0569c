"""Per-team breakdown of club teammate clusters."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple

from datadesk.models import GraphConsistencyError, GraphEdge, GraphNode, NodeCategory


# A cluster of one player has no club teammate in the squad, so it counts as zero.
LONE_PLAYER_WEIGHT = 1


def _cluster_size(weight: int) -> int:
    return 0 if weight == LONE_PLAYER_WEIGHT else weight


def summarize_teammate_clusters(
    edges: Sequence[GraphEdge],
    nodes: Sequence[GraphNode],
) -> Dict[str, Tuple[int, ...]]:
    """Map each national team to its club cluster sizes, largest first.

    Teams are ordered by total (sum of sizes) descending, then by label.
    """

    by_id = {node.id: node for node in nodes}
    sizes: Dict[str, List[int]] = {
        node.label: [] for node in nodes if node.category is NodeCategory.NATIONAL_TEAM
    }

    for edge in edges:
        source = by_id.get(edge.from_id)
        target = by_id.get(edge.to_id)
        if source is None or target is None:
            missing = edge.from_id if source is None else edge.to_id
            raise GraphConsistencyError(f"edge references unassigned node id {missing}")
        if target.category is not NodeCategory.NATIONAL_TEAM:
            raise GraphConsistencyError(f"edge target {edge.to_id} is not a national team node")
        sizes[target.label].append(_cluster_size(edge.weight))

    ranked = sorted(sizes.items(), key=lambda item: (-sum(item[1]), item[0]))
    return {team: tuple(sorted(values, reverse=True)) for team, values in ranked}


def team_totals(summary: Mapping[str, Sequence[int]]) -> Dict[str, int]:
    """Imported-teammate total per team, in the summary's ranking order."""

    return {team: sum(values) for team, values in summary.items()}
