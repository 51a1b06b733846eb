"""
Compiled-contract artifacts and their per-artifact indices.

A Truffle build record (``build/contracts/<Name>.json``) is read into a
``ContractArtifact``.  ``ArtifactIndex`` then decodes everything the
normalizer needs exactly once: the instruction index over the deployed
bytecode, the deployed source map, line-break positions and the typed AST
of every source file.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from .bytecode.instructions import InstructionIndex, build_instruction_index
from .errors import ArtifactError
from .events import EventCallback, EventKind, emit
from .solast.nodes import Node, parse_ast
from .srcmap.decoder import SourceMap, decode_source_map
from .srcmap.linecol import line_break_positions

# Fields that the compiler may leave empty; empty values are dropped
# before the artifact is used.
_OPTIONAL_CODE_FIELDS = ("bytecode", "deployedBytecode", "sourceMap", "deployedSourceMap")


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == "0x"


def clean_empty_props(build: dict[str, Any], on_event: Optional[EventCallback] = None) -> dict[str, Any]:
    """
    Copy of *build* without empty bytecode and source-map fields.

    An ``EMPTY_FIELD_DROPPED`` event is emitted for each dropped field
    that was present.
    """
    cleaned = dict(build)
    name = build.get("contractName", "?")
    for key in _OPTIONAL_CODE_FIELDS:
        if key not in cleaned:
            continue
        if _is_empty(cleaned[key]):
            del cleaned[key]
            emit(
                on_event, EventKind.EMPTY_FIELD_DROPPED,
                f"{name}: {key} is empty, omitting it",
                contract=name, field=key,
            )
    return cleaned


@dataclass(frozen=True)
class SourceFile:
    path: str
    text: Optional[str] = None
    ast: Optional[dict[str, Any]] = field(default=None, repr=False)


@dataclass
class ContractArtifact:
    contract_name: str
    deployed_bytecode: str = ""
    bytecode: str = ""
    deployed_source_map: str = ""
    source_map: str = ""
    source_list: list[str] = field(default_factory=list)
    sources: dict[str, SourceFile] = field(default_factory=dict)

    @property
    def main_source(self) -> Optional[str]:
        return self.source_list[0] if self.source_list else None

    @classmethod
    def from_build_json(
        cls,
        build: dict[str, Any],
        on_event: Optional[EventCallback] = None,
    ) -> "ContractArtifact":
        """
        Read a Truffle build record.

        Multi-file records carry a ``sources`` mapping of path to
        ``{source, ast}``; single-file records use ``sourcePath``,
        ``source`` and ``ast`` (falling back to ``legacyAST``).
        """
        if not isinstance(build, dict) or not build.get("contractName"):
            raise ArtifactError("build record has no contractName")
        build = clean_empty_props(build, on_event)

        sources: dict[str, SourceFile] = {}
        if isinstance(build.get("sources"), dict):
            for path, entry in build["sources"].items():
                entry = entry or {}
                sources[path] = SourceFile(path, entry.get("source"), entry.get("ast") or entry.get("legacyAST"))
            source_list = list(build.get("sourceList") or sources.keys())
        elif build.get("sourcePath"):
            path = build["sourcePath"]
            sources[path] = SourceFile(path, build.get("source"), build.get("ast") or build.get("legacyAST"))
            source_list = [path]
        else:
            source_list = []

        return cls(
            contract_name=build["contractName"],
            deployed_bytecode=build.get("deployedBytecode", ""),
            bytecode=build.get("bytecode", ""),
            deployed_source_map=build.get("deployedSourceMap", ""),
            source_map=build.get("sourceMap", ""),
            source_list=source_list,
            sources=sources,
        )


def load_build_file(path: Path | str) -> dict[str, Any]:
    """Load one build JSON file."""
    with open(path) as f:
        return json.load(f)


def missing_contracts(artifacts: Iterable[ContractArtifact], wanted: Optional[Iterable[str]]) -> list[str]:
    """Names in *wanted* that no artifact provides, in request order."""
    if not wanted:
        return []
    present = {a.contract_name for a in artifacts}
    return [name for name in wanted if name not in present]


class ArtifactIndex:
    """
    Decoded, read-only lookup tables for one artifact.

    Raises ``DecodeError`` subclasses from the constructor when the
    deployed bytecode or source map is malformed.
    """

    def __init__(self, artifact: ContractArtifact):
        self.artifact = artifact
        self.instructions: InstructionIndex = build_instruction_index(artifact.deployed_bytecode)
        self.source_map: SourceMap = decode_source_map(artifact.deployed_source_map)
        self._line_breaks: dict[str, list[int]] = {}
        self._asts: dict[str, Node] = {}
        for path, src in artifact.sources.items():
            if src.text is not None:
                self._line_breaks[path] = line_break_positions(src.text)
            tree = parse_ast(src.ast)
            if tree is not None:
                self._asts[path] = tree

    def _lookup(self, table: dict[str, Any], source: str) -> Any:
        if source in table:
            return table[source]
        # scanner paths often differ from build paths; fall back to a
        # basename match when it is unambiguous
        base = os.path.basename(source)
        hits = [k for k in table if os.path.basename(k) == base]
        if len(hits) == 1:
            return table[hits[0]]
        return None

    def line_breaks(self, source: str) -> Optional[list[int]]:
        return self._lookup(self._line_breaks, source)

    def ast(self, source: str) -> Optional[Node]:
        return self._lookup(self._asts, source)
