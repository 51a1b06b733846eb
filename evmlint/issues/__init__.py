"""Scanner issue models, remapping and normalization."""

from .models import (
    Description,
    FileReport,
    LocationKind,
    NormalizedIssue,
    RawIssue,
    SourceReport,
    is_fatal,
)

__all__ = [
    "Description",
    "FileReport",
    "LocationKind",
    "NormalizedIssue",
    "RawIssue",
    "SourceReport",
    "is_fatal",
]
