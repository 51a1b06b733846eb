"""
Issue records on both sides of normalization.

``RawIssue`` is one scanner finding with a single location string.
``NormalizedIssue`` and ``FileReport`` are the canonical, ESLint-shaped
output; they are frozen and serialize with ``to_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..srcmap.linecol import UNRESOLVED, LineColumn


def is_fatal(fatal: bool, severity: int) -> bool:
    """An issue counts as an error when flagged fatal or mapped to severity 2."""
    return fatal or severity == 2


class LocationKind(Enum):
    """Coordinate system of ``RawIssue.location``, keyed by ``sourceFormat``."""
    BYTECODE_OFFSET = "evm-byzantium-bytecode"
    SOURCE_MAP_TEXT = "text"

    @classmethod
    def from_source_format(cls, source_format: Optional[str]) -> Optional["LocationKind"]:
        """None for formats this engine cannot resolve."""
        for member in cls:
            if member.value == source_format:
                return member
        return None


@dataclass(frozen=True)
class Description:
    head: str = ""
    tail: str = ""


@dataclass(frozen=True)
class RawIssue:
    severity: str
    swc_id: str
    description: Description
    location: str
    swc_title: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any], location: str) -> "RawIssue":
        desc = raw.get("description") or {}
        return cls(
            severity=raw.get("severity", ""),
            swc_id=raw.get("swcID", raw.get("swcId", "")),
            description=Description(desc.get("head", ""), desc.get("tail", "")),
            location=location,
            swc_title=raw.get("swcTitle", ""),
        )


@dataclass(frozen=True)
class SourceReport:
    """Scanner findings attributed to one source, before normalization."""
    source: str
    source_format: str
    source_type: str = ""
    issues: tuple[RawIssue, ...] = ()


@dataclass(frozen=True)
class NormalizedIssue:
    rule_id: str
    message: str
    severity: int
    mythx_severity: str
    fatal: bool
    start: LineColumn = UNRESOLVED
    end: Optional[LineColumn] = None

    def to_dict(self) -> dict[str, Any]:
        """ESLint message shape; ``endLine``/``endCol`` only when an end exists."""
        out: dict[str, Any] = {
            "ruleId": self.rule_id,
            "message": self.message,
            "severity": self.severity,
            "mythXseverity": self.mythx_severity,
            "fatal": self.fatal,
            "line": self.start.line,
            "column": self.start.column,
        }
        if self.end is not None:
            out["endLine"] = self.end.line
            out["endCol"] = self.end.column
        return out


@dataclass(frozen=True)
class FileReport:
    """
    Normalized issues for one file.

    ``error_count`` and ``warning_count`` are derived from ``messages`` and
    cannot be set independently.
    """
    file_path: str
    messages: tuple[NormalizedIssue, ...] = ()
    fixable_error_count: int = 0
    fixable_warning_count: int = 0
    error_count: int = field(init=False)
    warning_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages))
        errors = sum(1 for m in self.messages if is_fatal(m.fatal, m.severity))
        object.__setattr__(self, "error_count", errors)
        object.__setattr__(self, "warning_count", len(self.messages) - errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "fixableErrorCount": self.fixable_error_count,
            "fixableWarningCount": self.fixable_warning_count,
            "messages": [m.to_dict() for m in self.messages],
        }
