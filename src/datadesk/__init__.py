"""Roster graph and admissions competitiveness pipelines for data stories."""

__version__ = "0.1.0"
