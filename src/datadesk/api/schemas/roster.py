from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GraphNodeResponse(BaseModel):
    id: int
    label: str
    group: str
    category: str
    value: float
    color: str


class GraphEdgeResponse(BaseModel):
    from_id: int = Field(..., alias="from")
    to: int
    weight: int = Field(..., ge=1)
    width: float

    model_config = ConfigDict(populate_by_name=True)


class GraphResponse(BaseModel):
    nodes: List[GraphNodeResponse]
    edges: List[GraphEdgeResponse]
    unknown_continents: List[str] = Field(default_factory=list)


class TeamClustersResponse(BaseModel):
    rank: int
    team: str
    continent: Optional[str] = None
    sizes: List[int]
    total: int


class ClusterResponse(BaseModel):
    teams: List[TeamClustersResponse]
