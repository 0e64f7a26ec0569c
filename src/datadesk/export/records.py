"""List-of-records payloads handed to graph and chart renderers."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Dict, List, Mapping, Sequence

from datadesk.models import DerivedRatio, GraphEdge, GraphNode, IndexedSeries


class ExportError(RuntimeError):
    """Raised when records cannot be rendered to the requested format."""


Record = Dict[str, Any]

# Clubs carry no continent; renderers group them under this label.
CLUB_GROUP = "None"
EDGE_WIDTH_SCALE = 1.0


def nodes_to_records(nodes: Sequence[GraphNode]) -> List[Record]:
    return [
        {
            "id": node.id,
            "label": node.label,
            "group": node.continent.value if node.continent is not None else CLUB_GROUP,
            "category": node.category.value,
            "value": node.display_size,
            "color": node.display_color,
        }
        for node in nodes
    ]


def edges_to_records(edges: Sequence[GraphEdge]) -> List[Record]:
    return [
        {
            "from": edge.from_id,
            "to": edge.to_id,
            "weight": edge.weight,
            "width": edge.weight * EDGE_WIDTH_SCALE,
        }
        for edge in edges
    ]


def cluster_records(summary: Mapping[str, Sequence[int]]) -> List[Record]:
    """One bar segment per (team, cluster); teams keep the summary's ranking order."""

    records: List[Record] = []
    for team, sizes in summary.items():
        total = sum(sizes)
        for rank, size in enumerate(sizes, start=1):
            records.append({"team": team, "cluster_rank": rank, "size": size, "total": total})
    return records


def ratio_chart_records(ratios: Sequence[DerivedRatio]) -> List[Record]:
    return [
        {
            "x": ratio.number_enrolled,
            "y": ratio.ratio,
            "category": ratio.institution_control.value,
            "frame": ratio.year,
            "label": ratio.institution_name,
        }
        for ratio in ratios
    ]


def index_chart_records(series: Sequence[IndexedSeries]) -> List[Record]:
    return [
        {
            "x": point.year,
            "y": point.index,
            "category": point.group_key,
            "frame": point.year,
        }
        for point in series
    ]


def records_to_csv(records: Sequence[Mapping[str, Any]]) -> str:
    """Render records as CSV text; the first record's keys define the header."""

    buffer = StringIO()
    if not records:
        return ""
    headers = list(records[0].keys())
    writer = csv.DictWriter(buffer, fieldnames=headers, lineterminator="\n")
    writer.writeheader()
    for idx, record in enumerate(records):
        extra = set(record) - set(headers)
        if extra:
            raise ExportError(f"record {idx} has fields not in header: {sorted(extra)}")
        writer.writerow(record)
    return buffer.getvalue()
