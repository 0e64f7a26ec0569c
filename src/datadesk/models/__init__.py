"""Canonical record types."""

from .admissions import (
    AdmissionsRecord,
    DerivedRatio,
    DirectoryRecord,
    IndexedSeries,
    InstitutionControl,
)
from .roster import (
    GraphConsistencyError,
    GraphEdge,
    GraphNode,
    NodeCategory,
    PlayerRecord,
    RosterGraph,
)

__all__ = [
    "AdmissionsRecord",
    "DerivedRatio",
    "DirectoryRecord",
    "IndexedSeries",
    "InstitutionControl",
    "GraphConsistencyError",
    "GraphEdge",
    "GraphNode",
    "NodeCategory",
    "PlayerRecord",
    "RosterGraph",
]
