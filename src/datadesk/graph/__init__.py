"""Roster graph construction and teammate cluster summaries."""

from .builder import FIRST_NODE_ID, build_roster_graph, validate_graph
from .clusters import summarize_teammate_clusters, team_totals

__all__ = [
    "FIRST_NODE_ID",
    "build_roster_graph",
    "validate_graph",
    "summarize_teammate_clusters",
    "team_totals",
]
