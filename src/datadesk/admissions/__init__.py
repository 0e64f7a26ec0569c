"""Admissions competitiveness metrics."""

from .indexer import (
    GROUP_BY_CHOICES,
    METRIC_CHOICES,
    compute_index,
    compute_ratios,
)

__all__ = [
    "GROUP_BY_CHOICES",
    "METRIC_CHOICES",
    "compute_index",
    "compute_ratios",
]
