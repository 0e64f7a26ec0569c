"""Serialization helpers for renderers (records, CSV)."""

from .records import (
    CLUB_GROUP,
    ExportError,
    cluster_records,
    edges_to_records,
    index_chart_records,
    nodes_to_records,
    ratio_chart_records,
    records_to_csv,
)

__all__ = [
    "CLUB_GROUP",
    "ExportError",
    "cluster_records",
    "edges_to_records",
    "index_chart_records",
    "nodes_to_records",
    "ratio_chart_records",
    "records_to_csv",
]
