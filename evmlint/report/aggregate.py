"""
Group file reports by basename.

One contract is usually analyzed several times (once per deployment or
source combination), and the scanner may name the same file by different
absolute paths.  Reports are merged per basename, keyed by the path seen
first, with messages kept in input order.
"""

from __future__ import annotations

import os
from typing import Iterable

from ..issues.models import FileReport


def group_reports_by_basename(reports: Iterable[FileReport]) -> list[FileReport]:
    """Merge reports sharing a basename; groups appear in first-occurrence order."""
    groups: dict[str, dict] = {}
    for report in reports:
        base = os.path.basename(report.file_path)
        group = groups.get(base)
        if group is None:
            groups[base] = {
                "file_path": report.file_path,
                "messages": list(report.messages),
                "fixable_error_count": report.fixable_error_count,
                "fixable_warning_count": report.fixable_warning_count,
            }
            continue
        group["messages"].extend(report.messages)
        group["fixable_error_count"] += report.fixable_error_count
        group["fixable_warning_count"] += report.fixable_warning_count

    return [
        FileReport(
            file_path=g["file_path"],
            messages=tuple(g["messages"]),
            fixable_error_count=g["fixable_error_count"],
            fixable_warning_count=g["fixable_warning_count"],
        )
        for g in groups.values()
    ]
