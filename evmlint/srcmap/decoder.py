"""
Decoder for solc compressed source maps.

A source map is a ``;``-separated list with one entry per instruction::

    start:length:fileIndex:jump[:modifierDepth]

Any field that is empty or missing from the end of an entry repeats the
value of the previous entry, so ``"10:5:0;;20:3:1"`` decodes to three
entries where the second is a copy of the first.  Decoding is a fold over
the entries carrying the last seen value of each field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional, Sequence

from ..errors import SourceMapDecodeError


class JumpType(Enum):
    """How an instruction affects call depth."""
    IN = "i"
    OUT = "o"
    REGULAR = "-"


@dataclass(frozen=True)
class SourceMapEntry:
    """Absolute source range of one instruction."""
    start: int
    length: int
    file_index: int
    jump_type: JumpType = JumpType.REGULAR
    modifier_depth: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length

    def contains(self, start: int, length: int) -> bool:
        return self.start <= start and start + length <= self.end


@dataclass
class _Carry:
    """Accumulator holding the last value seen for each field."""
    start: Optional[int] = None
    length: Optional[int] = None
    file_index: Optional[int] = None
    jump_type: JumpType = JumpType.REGULAR
    modifier_depth: int = 0

    def freeze(self, entry: int) -> SourceMapEntry:
        if self.start is None or self.length is None or self.file_index is None:
            raise SourceMapDecodeError(
                "first entry must give start, length and file index", entry
            )
        return SourceMapEntry(
            self.start, self.length, self.file_index,
            self.jump_type, self.modifier_depth,
        )


_INT_RE = re.compile(r"-?[0-9]+")


def _parse_int(text: str, name: str, entry: int) -> int:
    # int() alone would also accept "+5", " 5" and "1_0"
    if not _INT_RE.fullmatch(text):
        raise SourceMapDecodeError(f"malformed {name} field {text!r}", entry)
    return int(text)


def _parse_jump(text: str, entry: int) -> JumpType:
    try:
        return JumpType(text)
    except ValueError:
        raise SourceMapDecodeError(f"unknown jump type {text!r}", entry) from None


def _fold(carry: _Carry, segment: str, entry: int) -> _Carry:
    fields = segment.split(":")
    if len(fields) > 5:
        raise SourceMapDecodeError(f"too many fields in {segment!r}", entry)
    fields += [""] * (5 - len(fields))
    start, length, file_index, jump, depth = fields

    nxt = replace(carry)
    if start:
        nxt.start = _parse_int(start, "start", entry)
    if length:
        nxt.length = _parse_int(length, "length", entry)
    if file_index:
        nxt.file_index = _parse_int(file_index, "file index", entry)
    if jump:
        nxt.jump_type = _parse_jump(jump, entry)
    if depth:
        nxt.modifier_depth = _parse_int(depth, "modifier depth", entry)
    return nxt


class SourceMap(Sequence[SourceMapEntry]):
    """Decoded source map, index-aligned with instruction numbers."""

    def __init__(self, entries: list[SourceMapEntry]):
        self._entries = entries

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SourceMapEntry]:
        return iter(self._entries)

    def at(self, instruction: int) -> Optional[SourceMapEntry]:
        """Entry for *instruction*, or None when the map is too short."""
        if 0 <= instruction < len(self._entries):
            return self._entries[instruction]
        return None

    def entry_containing(self, start: int, length: int = 0) -> Optional[int]:
        """
        Index of the narrowest entry whose range contains ``[start, start+length)``.

        Ties go to the earliest instruction.
        """
        best: Optional[int] = None
        for i, e in enumerate(self._entries):
            if e.start < 0 or not e.contains(start, length):
                continue
            if best is None or e.length < self._entries[best].length:
                best = i
        return best

    def __repr__(self) -> str:
        return f"SourceMap({len(self._entries)} entries)"


def decode_source_map(text: str) -> SourceMap:
    """
    Decode a compressed source map.

    Trailing empty segments are ignored; an empty segment followed by
    further entries repeats the previous entry.

    Raises:
        SourceMapDecodeError: malformed numeric field or jump letter
    """
    segments = text.strip().split(";") if text and text.strip() else []
    while segments and segments[-1] == "":
        segments.pop()

    entries: list[SourceMapEntry] = []
    carry = _Carry()
    for i, segment in enumerate(segments):
        carry = _fold(carry, segment, i)
        entries.append(carry.freeze(i))
    return SourceMap(entries)
