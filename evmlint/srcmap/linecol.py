"""
Line/column resolution over newline positions.

Lines are 1-based and columns 0-based.  A newline character belongs to the
line it terminates.  Anything that cannot be resolved comes back as the
``UNRESOLVED`` sentinel ``(-1, 0)`` instead of raising.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional, Sequence

LineBreakIndex = Sequence[int]


@dataclass(frozen=True, order=True)
class LineColumn:
    line: int
    column: int

    @property
    def resolved(self) -> bool:
        return self.line != -1

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


UNRESOLVED = LineColumn(-1, 0)


def line_break_positions(text: str) -> list[int]:
    """Offsets of every ``\\n`` in *text*, in increasing order."""
    return [i for i, ch in enumerate(text) if ch == "\n"]


def offset_to_line_column(offset: int, breaks: Optional[LineBreakIndex]) -> LineColumn:
    """
    Resolve an absolute character offset.

    ``bisect_left`` counts the line breaks strictly before *offset*, which
    is the 0-based line; the column is measured from the character after
    the preceding break.
    """
    if breaks is None or offset < 0:
        return UNRESOLVED
    line = bisect_left(breaks, offset)
    line_start = breaks[line - 1] + 1 if line > 0 else 0
    return LineColumn(line + 1, offset - line_start)


def range_to_line_columns(
    start: int,
    length: int,
    breaks: Optional[LineBreakIndex],
) -> tuple[LineColumn, Optional[LineColumn]]:
    """
    Resolve a ``start:length`` source range.

    Returns ``(start, end)``; ``end`` is None when the range has no
    resolvable end (unresolvable start or negative length).
    """
    first = offset_to_line_column(start, breaks)
    if not first.resolved or length < 0:
        return first, None
    return first, offset_to_line_column(start + length, breaks)


def compare_line_col(line1: int, col1: int, line2: int, col2: int) -> int:
    """Negative, zero or positive as (line1, col1) sorts before, equal to or after (line2, col2)."""
    if line1 != line2:
        return line1 - line2
    return col1 - col2
