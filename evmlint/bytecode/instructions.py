"""
Instruction index over EVM bytecode.

Maps each byte offset that starts an opcode to its 0-based instruction
number.  PUSH1..PUSH32 (0x60..0x7f) carry 1..32 bytes of immediate data
that are skipped; those bytes never appear as keys.
"""

from __future__ import annotations

import re
from typing import Iterator, Mapping, Optional

from ..errors import BytecodeDecodeError

PUSH1 = 0x60
PUSH32 = 0x7F

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def push_operand_size(opcode: int) -> int:
    """Number of immediate bytes following *opcode* (0 for non-push)."""
    if PUSH1 <= opcode <= PUSH32:
        return opcode - PUSH1 + 1
    return 0


def decode_hex(bytecode: str) -> bytes:
    """
    Decode a hex bytecode string, with or without a ``0x`` prefix.

    Raises:
        BytecodeDecodeError: odd number of digits or non-hex characters
    """
    text = bytecode.strip()
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if len(text) % 2:
        raise BytecodeDecodeError(
            f"bytecode has an odd number of hex digits ({len(text)})"
        )
    if not _HEX_RE.match(text):
        raise BytecodeDecodeError("bytecode contains non-hex characters")
    return bytes.fromhex(text)


class InstructionIndex(Mapping[int, int]):
    """
    Read-only mapping from byte offset to instruction number.

    Built once per bytecode.  Offsets and instruction numbers are both
    strictly increasing; the reverse lookup is a plain list because
    instruction numbers are dense.
    """

    def __init__(self, offsets: list[int]):
        self._offsets = offsets
        self._numbers = {off: i for i, off in enumerate(offsets)}

    def __getitem__(self, offset: int) -> int:
        return self._numbers[offset]

    def __iter__(self) -> Iterator[int]:
        return iter(self._offsets)

    def __len__(self) -> int:
        return len(self._offsets)

    def instruction_at(self, offset: int) -> Optional[int]:
        """Instruction number starting at *offset*, or None."""
        return self._numbers.get(offset)

    def offset_of(self, instruction: int) -> Optional[int]:
        """Byte offset of instruction number *instruction*, or None."""
        if 0 <= instruction < len(self._offsets):
            return self._offsets[instruction]
        return None

    def __repr__(self) -> str:
        return f"InstructionIndex({len(self._offsets)} instructions)"


def build_instruction_index(bytecode: str) -> InstructionIndex:
    """Walk *bytecode* and index every opcode start."""
    code = decode_hex(bytecode)
    offsets: list[int] = []
    pc = 0
    while pc < len(code):
        offsets.append(pc)
        # a push cut off by the end of code is still one instruction
        pc += 1 + push_operand_size(code[pc])
    return InstructionIndex(offsets)
