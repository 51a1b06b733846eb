"""
Issue normalization: scanner findings → ESLint-style messages.

Each ``RawIssue`` is resolved according to the ``sourceFormat`` of its
report:

- ``evm-byzantium-bytecode``: the first ``:``-separated token is a byte
  offset into the deployed bytecode.  It is mapped to an instruction
  number, then to a source-map entry, then to line/column.
- ``text``: the first ``;``-separated token is a ``start:length`` source
  range that is resolved directly.

Locations that cannot be resolved become ``line -1, column 0``; the issue
itself is kept.  The only way an issue disappears is the false-positive
rule for dynamically-sized array declarations.

Mythril downplays severity relative to ESLint: what ESLint calls an
error Mythril calls "High", and ESLint's warning is Mythril's "Medium".
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..artifact import ArtifactIndex
from ..errors import SourceMapMismatchError
from ..events import EventCallback, EventKind, emit
from ..solast.nodes import find_enclosing, is_dynamic_array_declaration
from ..srcmap.linecol import UNRESOLVED, LineColumn, range_to_line_columns
from .models import (
    FileReport,
    LocationKind,
    NormalizedIssue,
    RawIssue,
    SourceReport,
    is_fatal,
)

SEVERITY_MAP: Mapping[str, int] = MappingProxyType({
    "High": 2,
    "Medium": 1,
})
DEFAULT_SEVERITY = 1


def map_severity(label: str) -> int:
    return SEVERITY_MAP.get(label, DEFAULT_SEVERITY)


def format_message(issue: RawIssue, space_limited: bool) -> str:
    head = issue.description.head
    if space_limited:
        return head
    return f"{head} {issue.description.tail}"


@dataclass(frozen=True)
class Resolution:
    """Where an issue points: line/column plus the raw source range."""
    start: LineColumn = UNRESOLVED
    end: Optional[LineColumn] = None
    src_start: Optional[int] = None
    src_length: int = 0
    source: Optional[str] = None


_UNRESOLVED = Resolution()


def _first_int(token: str) -> Optional[int]:
    try:
        return int(token, 10)
    except ValueError:
        return None


class IssueNormalizer:
    """
    Normalizes the issues of one artifact.

    Args:
        index: decoded tables of the artifact the issues refer to
        space_limited: emit only the description head
        strict: raise ``SourceMapMismatchError`` on source-map invariant
            violations instead of degrading to an unresolved location
        on_event: callback receiving suppression and failure events
    """

    def __init__(
        self,
        index: ArtifactIndex,
        *,
        space_limited: bool = False,
        strict: bool = False,
        on_event: Optional[EventCallback] = None,
    ):
        self.index = index
        self.space_limited = space_limited
        self.strict = strict
        self.on_event = on_event

    # ── Location resolution ──────────────────────────────────────────────

    def _resolve_range(self, start: int, length: Optional[int], source: str) -> Resolution:
        breaks = self.index.line_breaks(source)
        first, end = range_to_line_columns(start, length if length is not None else -1, breaks)
        return Resolution(first, end, start, max(length or 0, 0), source)

    def _entry_source(self, file_index: int, fallback: str) -> str:
        """The ``sourceList`` path a source-map entry points into."""
        source_list = self.index.artifact.source_list
        if 0 <= file_index < len(source_list):
            return source_list[file_index]
        return fallback

    def resolve_bytecode_offset(self, location: str, source: str) -> Resolution:
        offset = _first_int(location.split(":")[0])
        if offset is None:
            return _UNRESOLVED
        instruction = self.index.instructions.instruction_at(offset)
        if instruction is None:
            return _UNRESOLVED

        entry = self.index.source_map.at(instruction)
        if entry is None:
            if self.strict:
                raise SourceMapMismatchError(instruction, len(self.index.source_map))
            emit(
                self.on_event, EventKind.RESOLUTION_FAILED,
                f"bytecode offset {offset} (instruction {instruction}) has no "
                f"source map entry in {self.index.artifact.contract_name}",
                offset=offset, instruction=instruction,
            )
            return _UNRESOLVED
        if entry.start < 0:
            # compiler-generated code has no source range
            return _UNRESOLVED
        return self._resolve_range(
            entry.start, entry.length, self._entry_source(entry.file_index, source),
        )

    def resolve_source_text(self, location: str, source: str) -> Resolution:
        fields = location.split(";")[0].split(":")
        start = _first_int(fields[0])
        if start is None:
            return _UNRESOLVED
        length = _first_int(fields[1]) if len(fields) > 1 else None
        return self._resolve_range(start, length, source)

    def resolve(self, issue: RawIssue, kind: Optional[LocationKind], source: str) -> Resolution:
        if kind is LocationKind.BYTECODE_OFFSET:
            return self.resolve_bytecode_offset(issue.location, source)
        if kind is LocationKind.SOURCE_MAP_TEXT:
            return self.resolve_source_text(issue.location, source)
        return _UNRESOLVED

    # ── Suppression ──────────────────────────────────────────────────────

    def is_ignorable(self, issue: RawIssue, where: Resolution, source: str) -> bool:
        """
        True when the issue sits on a dynamically-sized array declaration.

        Mythril reports a known false positive on these declarations.
        """
        if where.src_start is None:
            return False
        source = where.source or source
        ast = self.index.ast(source)
        if ast is None:
            return False
        node = find_enclosing(ast, where.src_start, where.src_length)
        if not is_dynamic_array_declaration(node):
            return False
        emit(
            self.on_event, EventKind.ISSUE_SUPPRESSED,
            f"Ignoring Mythril issue {issue.swc_id} around dynamically-allocated array "
            f"'{node.name}' in {source}",
            swc_id=issue.swc_id, source=source, declaration=node.name,
        )
        return True

    # ── Normalization ────────────────────────────────────────────────────

    def normalize(
        self,
        issue: RawIssue,
        kind: Optional[LocationKind],
        source: str,
        fatal: bool = False,
    ) -> Optional[NormalizedIssue]:
        """The ESLint message for *issue*, or None if it is suppressed."""
        where = self.resolve(issue, kind, source)
        if self.is_ignorable(issue, where, source):
            return None
        severity = map_severity(issue.severity)
        return NormalizedIssue(
            rule_id=issue.swc_id,
            message=format_message(issue, self.space_limited),
            severity=severity,
            mythx_severity=issue.severity,
            fatal=is_fatal(fatal, severity),
            start=where.start,
            end=where.end,
        )

    def normalize_report(self, report: SourceReport) -> FileReport:
        kind = LocationKind.from_source_format(report.source_format)
        if kind is None and report.issues:
            emit(
                self.on_event, EventKind.UNSUPPORTED_SOURCE_FORMAT,
                f"unsupported source format {report.source_format!r} for "
                f"{report.source}; {len(report.issues)} issue(s) left without location",
                source=report.source, source_format=report.source_format,
            )
        messages = []
        for issue in report.issues:
            normalized = self.normalize(issue, kind, report.source)
            if normalized is not None:
                messages.append(normalized)
        return FileReport(file_path=report.source, messages=tuple(messages))

    def normalize_all(self, reports: Iterable[SourceReport]) -> list[FileReport]:
        return [self.normalize_report(r) for r in reports]
