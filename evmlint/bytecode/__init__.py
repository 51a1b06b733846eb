"""EVM bytecode decoding."""

from .instructions import InstructionIndex, build_instruction_index, decode_hex

__all__ = ["InstructionIndex", "build_instruction_index", "decode_hex"]
