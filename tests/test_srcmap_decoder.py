"""
Tests for compressed source-map decoding.
"""

import pytest

from evmlint.errors import SourceMapDecodeError
from evmlint.srcmap.decoder import JumpType, SourceMapEntry, decode_source_map


class TestCarryForward:
    """Omitted fields repeat the previous entry."""

    def test_empty_entry_copies_previous(self):
        sm = decode_source_map("10:5:0;;20:3:1")
        assert len(sm) == 3
        assert (sm[1].start, sm[1].length, sm[1].file_index) == (10, 5, 0)
        assert (sm[2].start, sm[2].length, sm[2].file_index) == (20, 3, 1)

    def test_trailing_fields_inherit(self):
        sm = decode_source_map("1:2:0:i;5;:7;::3;:::o")
        assert sm[1] == SourceMapEntry(5, 2, 0, JumpType.IN)
        assert sm[2] == SourceMapEntry(5, 7, 0, JumpType.IN)
        assert sm[3] == SourceMapEntry(5, 7, 3, JumpType.IN)
        assert sm[4] == SourceMapEntry(5, 7, 3, JumpType.OUT)

    def test_jump_type_defaults_to_regular(self):
        sm = decode_source_map("0:1:0")
        assert sm[0].jump_type is JumpType.REGULAR
        assert sm[0].modifier_depth == 0

    def test_modifier_depth(self):
        sm = decode_source_map("0:1:0:-:2;4")
        assert sm[0].modifier_depth == 2
        assert sm[1].modifier_depth == 2

    def test_negative_values(self):
        sm = decode_source_map("0:1:0;-1:-1:-1")
        assert sm[1] == SourceMapEntry(-1, -1, -1)


class TestSegments:

    def test_trailing_empty_segments_ignored(self):
        assert len(decode_source_map("1:2:0;;;")) == 1

    def test_inner_empty_segment_counts(self):
        assert len(decode_source_map("1:2:0;;;3")) == 4

    def test_empty_map(self):
        assert len(decode_source_map("")) == 0
        assert decode_source_map("").at(0) is None

    def test_at(self):
        sm = decode_source_map("1:2:0;3")
        assert sm.at(1).start == 3
        assert sm.at(2) is None
        assert sm.at(-1) is None


class TestErrors:

    @pytest.mark.parametrize("text", [
        "1:x:0", "1:2:0;a", "1:2:0;::q", "1:2:0:z",
        "1_0:2:0", "1: 5:0", "+5:2:0", "1:2:0;3 :4", "1:--2:0",
    ])
    def test_malformed_fields(self, text):
        with pytest.raises(SourceMapDecodeError):
            decode_source_map(text)

    def test_error_carries_entry_index(self):
        with pytest.raises(SourceMapDecodeError) as exc:
            decode_source_map("1:2:0;3;4:x")
        assert exc.value.entry == 2

    @pytest.mark.parametrize("text", ["1:2", ";1:2:0", ":2:0"])
    def test_first_entry_must_be_complete(self, text):
        with pytest.raises(SourceMapDecodeError):
            decode_source_map(text)

    def test_too_many_fields(self):
        with pytest.raises(SourceMapDecodeError):
            decode_source_map("1:2:0:-:0:9")


def test_entry_containing_round_trip():
    # contract, function, two statements: nested and disjoint ranges
    sm = decode_source_map("0:100:0;10:50;20:5;30:8;-1:-1:-1")
    for i in range(4):
        entry = sm[i]
        assert sm.entry_containing(entry.start, entry.length) == i


def test_entry_containing_miss():
    sm = decode_source_map("10:5:0")
    assert sm.entry_containing(40, 1) is None
