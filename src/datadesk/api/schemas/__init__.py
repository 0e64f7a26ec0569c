"""Pydantic models for API I/O."""

from .admissions import IndexPointResponse, IndexResponse, RatioResponse
from .roster import (
    ClusterResponse,
    GraphEdgeResponse,
    GraphNodeResponse,
    GraphResponse,
    TeamClustersResponse,
)

__all__ = [
    "IndexPointResponse",
    "IndexResponse",
    "RatioResponse",
    "ClusterResponse",
    "GraphEdgeResponse",
    "GraphNodeResponse",
    "GraphResponse",
    "TeamClustersResponse",
]
