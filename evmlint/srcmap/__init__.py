"""Compressed source-map decoding and line/column resolution."""

from .decoder import JumpType, SourceMap, SourceMapEntry, decode_source_map
from .linecol import (
    UNRESOLVED,
    LineColumn,
    compare_line_col,
    line_break_positions,
    offset_to_line_column,
    range_to_line_columns,
)

__all__ = [
    "JumpType",
    "SourceMap",
    "SourceMapEntry",
    "decode_source_map",
    "UNRESOLVED",
    "LineColumn",
    "compare_line_col",
    "line_break_positions",
    "offset_to_line_column",
    "range_to_line_columns",
]
