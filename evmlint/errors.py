"""
Exception hierarchy for evmlint.

Decode errors are fatal to a single artifact; the batch pipeline catches
them and reports the artifact as unanalyzable.  Invariant violations are
only raised when the normalizer runs in strict mode.
"""

from __future__ import annotations


class EvmLintError(Exception):
    """Base class for all evmlint errors."""


class DecodeError(EvmLintError):
    """Raised when compiler output cannot be decoded."""


class BytecodeDecodeError(DecodeError):
    """Bytecode hex string has an odd length or non-hex characters."""


class SourceMapDecodeError(DecodeError):
    """A compressed source-map entry has a malformed field."""

    def __init__(self, message: str, entry: int) -> None:
        super().__init__(f"source map entry {entry}: {message}")
        self.entry = entry


class SourceMapMismatchError(EvmLintError):
    """An instruction number has no entry in the source map."""

    def __init__(self, instruction: int, map_length: int) -> None:
        super().__init__(
            f"instruction {instruction} has no source map entry "
            f"(map has {map_length} entries)"
        )
        self.instruction = instruction
        self.map_length = map_length


class ArtifactError(EvmLintError):
    """A compiled-contract build record is missing required data."""
