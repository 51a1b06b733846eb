"""
Flatten scanner output into per-source reports.

The scanner returns, per analysis, a ``sourceList`` and a list of issues
each carrying one or more ``locations``.  Every location becomes its own
``RawIssue`` and is attributed to the source named by the file-index
field of its location string.
"""

from __future__ import annotations

from typing import Any, Iterable

from .models import RawIssue, SourceReport


def _source_index(location: str, n_sources: int) -> int:
    """
    File index named by a ``start:length:fileIndex`` location.

    Missing, ``-1`` or out-of-range indices go to the first source, which
    is the main contract being analyzed.
    """
    parts = location.split(";")[0].split(":")
    if len(parts) < 3:
        return 0
    try:
        index = int(parts[2])
    except ValueError:
        return 0
    if 0 <= index < n_sources:
        return index
    return 0


def remap_scanner_output(result: dict[str, Any]) -> list[SourceReport]:
    """One ``SourceReport`` per ``sourceList`` entry, in list order."""
    sources = list(result.get("sourceList") or [])
    if not sources:
        sources = [result.get("source", "")]
    buckets: list[list[RawIssue]] = [[] for _ in sources]

    for issue in result.get("issues") or []:
        locations = [
            loc["sourceMap"] for loc in issue.get("locations") or []
            if loc.get("sourceMap") is not None
        ]
        # an issue without a location still reaches the main source
        for source_map in locations or [""]:
            idx = _source_index(source_map, len(sources))
            buckets[idx].append(RawIssue.from_dict(issue, source_map))

    return [
        SourceReport(
            source=src,
            source_format=result.get("sourceFormat", ""),
            source_type=result.get("sourceType", ""),
            issues=tuple(bucket),
        )
        for src, bucket in zip(sources, buckets)
    ]


def remap_all(results: Iterable[dict[str, Any]]) -> list[SourceReport]:
    """``remap_scanner_output`` over a whole scanner response."""
    reports: list[SourceReport] = []
    for result in results:
        reports.extend(remap_scanner_output(result))
    return reports
