"""Aggregation of per-file reports."""

from .aggregate import group_reports_by_basename

__all__ = ["group_reports_by_basename"]
