"""REST API exposing the roster graph and admissions pipelines."""

from __future__ import annotations

import json
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from datadesk.admissions import compute_index, compute_ratios
from datadesk.api.schemas import (
    ClusterResponse,
    GraphEdgeResponse,
    GraphNodeResponse,
    GraphResponse,
    IndexPointResponse,
    IndexResponse,
    RatioResponse,
    TeamClustersResponse,
)
from datadesk.config import DEFAULT_CONTINENT_OVERRIDES, Continent, ContinentLookup, parse_continent
from datadesk.export import edges_to_records, nodes_to_records
from datadesk.graph import build_roster_graph, summarize_teammate_clusters
from datadesk.ingest import (
    parse_admissions_csv,
    parse_continent_csv,
    parse_directory_csv,
    parse_roster_csv,
)
from datadesk.models import NodeCategory, RosterGraph


def _parse_json_form(raw: str | None, *, name: str) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {name} JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail=f"{name} must be a JSON object")
    return data


def _parse_column_mapping(raw: str | None, *, name: str) -> dict[str, str] | None:
    data = _parse_json_form(raw, name=name)
    for key, value in data.items():
        if not isinstance(value, str) or not value.strip():
            raise HTTPException(
                status_code=400,
                detail=f"{name} values must be non-empty column names, got {key}={value!r}",
            )
    return data or None


def _parse_overrides(raw: str | None) -> dict[str, Continent]:
    overrides = dict(DEFAULT_CONTINENT_OVERRIDES)
    for name, label in _parse_json_form(raw, name="overrides").items():
        overrides[name] = parse_continent(str(label))
    return overrides


async def _read_text(upload: UploadFile | None, *, name: str, required: bool = True) -> str | None:
    if upload is None:
        if required:
            raise HTTPException(status_code=400, detail=f"{name} file is required")
        return None
    contents = await upload.read()
    if not contents:
        if required:
            raise HTTPException(status_code=400, detail=f"{name} file is empty")
        return None
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"{name} file is not UTF-8 text") from exc


def _graph_to_response(graph: RosterGraph) -> GraphResponse:
    return GraphResponse(
        nodes=[GraphNodeResponse.model_validate(record) for record in nodes_to_records(graph.nodes)],
        edges=[GraphEdgeResponse.model_validate(record) for record in edges_to_records(graph.edges)],
        unknown_continents=[
            node.label
            for node in graph.nodes
            if node.category is NodeCategory.NATIONAL_TEAM and node.continent is Continent.UNKNOWN
        ],
    )


def create_app() -> FastAPI:
    app = FastAPI(title="datadesk")

    async def _build_graph(
        roster: UploadFile,
        continents: UploadFile | None,
        roster_mapping: str | None,
        continent_mapping: str | None,
        overrides: str | None,
    ) -> RosterGraph:
        roster_text = await _read_text(roster, name="roster")
        continents_text = await _read_text(continents, name="continents", required=False)
        try:
            players = parse_roster_csv(
                roster_text or "",
                mapping=_parse_column_mapping(roster_mapping, name="roster_mapping"),
            )
            lookup = (
                parse_continent_csv(
                    continents_text,
                    mapping=_parse_column_mapping(continent_mapping, name="continent_mapping"),
                )
                if continents_text
                else ContinentLookup()
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return build_roster_graph(players, lookup, _parse_overrides(overrides))

    async def _load_admissions(admissions: UploadFile, directory: UploadFile):
        admissions_text = await _read_text(admissions, name="admissions")
        directory_text = await _read_text(directory, name="directory")
        try:
            return parse_admissions_csv(admissions_text or ""), parse_directory_csv(directory_text or "")
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/roster/graph", response_model=GraphResponse)
    async def roster_graph(
        roster: UploadFile = File(...),
        continents: UploadFile | None = File(None),
        roster_mapping: str | None = Form(None),
        continent_mapping: str | None = Form(None),
        overrides: str | None = Form(None),
    ) -> GraphResponse:
        graph = await _build_graph(roster, continents, roster_mapping, continent_mapping, overrides)
        return _graph_to_response(graph)

    @app.post("/roster/clusters", response_model=ClusterResponse)
    async def roster_clusters(
        roster: UploadFile = File(...),
        continents: UploadFile | None = File(None),
        roster_mapping: str | None = Form(None),
        continent_mapping: str | None = Form(None),
        overrides: str | None = Form(None),
    ) -> ClusterResponse:
        graph = await _build_graph(roster, continents, roster_mapping, continent_mapping, overrides)
        summary = summarize_teammate_clusters(graph.edges, graph.nodes)
        teams = []
        for rank, (team, sizes) in enumerate(summary.items(), start=1):
            node = graph.find(team, NodeCategory.NATIONAL_TEAM)
            teams.append(
                TeamClustersResponse(
                    rank=rank,
                    team=team,
                    continent=node.continent.value if node.continent is not None else None,
                    sizes=list(sizes),
                    total=sum(sizes),
                )
            )
        return ClusterResponse(teams=teams)

    @app.post("/admissions/ratios", response_model=list[RatioResponse])
    async def admissions_ratios(
        admissions: UploadFile = File(...),
        directory: UploadFile = File(...),
    ) -> list[RatioResponse]:
        admissions_records, directory_records = await _load_admissions(admissions, directory)
        return [
            RatioResponse(
                institution_id=ratio.institution_id,
                institution_name=ratio.institution_name,
                institution_control=ratio.institution_control.value,
                year=ratio.year,
                number_applied=ratio.number_applied,
                number_enrolled=ratio.number_enrolled,
                ratio=ratio.ratio,
            )
            for ratio in compute_ratios(admissions_records, directory_records)
        ]

    @app.post("/admissions/index", response_model=IndexResponse)
    async def admissions_index(
        admissions: UploadFile = File(...),
        directory: UploadFile = File(...),
        group_by: str = Form("institution_control"),
        metric: str = Form("enrolled"),
        base_year: int | None = Form(None),
    ) -> IndexResponse:
        admissions_records, directory_records = await _load_admissions(admissions, directory)
        try:
            series = compute_index(
                admissions_records,
                directory_records,
                group_by,  # type: ignore[arg-type]
                base_year if base_year is not None else "earliest",
                metric=metric,  # type: ignore[arg-type]
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return IndexResponse(
            group_by=group_by,  # type: ignore[arg-type]
            metric=metric,  # type: ignore[arg-type]
            series=[
                IndexPointResponse(
                    group_key=point.group_key,
                    year=point.year,
                    raw_value=point.raw_value,
                    base_year=point.base_year,
                    base_year_value=point.base_year_value,
                    index=point.index,
                )
                for point in series
            ],
        )

    return app
