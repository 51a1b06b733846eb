"""
evmlint: source-location resolution and issue normalization for EVM findings.

Turns scanner findings expressed as bytecode offsets or compiler source
ranges into ESLint-style reports with file/line/column locations:

1. Instruction index over deployed bytecode (push operands skipped)
2. Carry-forward decoding of solc compressed source maps
3. Line/column resolution over newline positions
4. Severity mapping, message shaping and false-positive suppression
5. Per-file aggregation of the resulting reports
"""

__version__ = "0.1.0"
