"""
Typed view of the solc JSON AST.

Only what node classification needs is kept: every node has a kind and a
source range, variable declarations carry their declared type, and array
types record whether they are dynamically sized.  Both the compact AST
(``nodeType`` keys) and the legacy AST (``name``/``children``) are
accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterator, Optional, Union


@dataclass(frozen=True)
class Src:
    """A ``start:length:fileIndex`` range from an AST ``src`` attribute."""
    start: int
    length: int
    file_index: int = -1

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["Src"]:
        if not text:
            return None
        parts = text.split(":")
        try:
            nums = [int(p) for p in parts[:3]]
        except ValueError:
            return None
        if len(nums) < 2:
            return None
        return cls(nums[0], nums[1], nums[2] if len(nums) > 2 else -1)

    def contains(self, start: int, length: int) -> bool:
        return self.start <= start and start + length <= self.start + self.length


# ── Type names ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ElementaryTypeName:
    name: str


@dataclass(frozen=True)
class ArrayTypeName:
    base: "TypeName"
    dynamic: bool


@dataclass(frozen=True)
class MappingTypeName:
    key: "TypeName"
    value: "TypeName"


@dataclass(frozen=True)
class UserDefinedTypeName:
    name: str


@dataclass(frozen=True)
class OtherTypeName:
    node_type: str


TypeName = Union[
    ElementaryTypeName, ArrayTypeName, MappingTypeName,
    UserDefinedTypeName, OtherTypeName,
]


# ── Nodes ────────────────────────────────────────────────────────────────────

class NodeKind(Enum):
    VARIABLE_DECLARATION = auto()
    OTHER = auto()


@dataclass(frozen=True)
class Node:
    node_type: str
    src: Optional[Src]
    children: tuple["Node", ...] = field(default=(), repr=False)

    def walk(self) -> Iterator["Node"]:
        """Pre-order traversal."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class VariableDeclaration(Node):
    name: str = ""
    type_name: Optional[TypeName] = None


def classify(node: Node) -> NodeKind:
    if isinstance(node, VariableDeclaration):
        return NodeKind.VARIABLE_DECLARATION
    return NodeKind.OTHER


def is_dynamic_array_declaration(node: Optional[Node]) -> bool:
    """True for a variable declaration whose type is a dynamically-sized array."""
    if node is None or classify(node) is not NodeKind.VARIABLE_DECLARATION:
        return False
    type_name = node.type_name
    return isinstance(type_name, ArrayTypeName) and type_name.dynamic


def find_enclosing(
    root: Node,
    start: int,
    length: int,
    kind: NodeKind = NodeKind.VARIABLE_DECLARATION,
) -> Optional[Node]:
    """Innermost node of *kind* whose range contains ``[start, start+length)``."""
    found: Optional[Node] = None
    for node in root.walk():
        if node.src is None or not node.src.contains(start, length):
            continue
        if classify(node) is kind:
            if found is None or node.src.length <= found.src.length:
                found = node
    return found


# ── JSON parsing ─────────────────────────────────────────────────────────────

def _is_compact(raw: dict[str, Any]) -> bool:
    return "nodeType" in raw


def _compact_children(raw: dict[str, Any]) -> list[dict[str, Any]]:
    out = []
    for key, value in raw.items():
        if key == "typeDescriptions":
            continue
        if isinstance(value, dict) and "nodeType" in value:
            out.append(value)
        elif isinstance(value, list):
            out.extend(v for v in value if isinstance(v, dict) and "nodeType" in v)
    return out


def _compact_type_name(raw: Optional[dict[str, Any]]) -> Optional[TypeName]:
    if not raw:
        return None
    node_type = raw.get("nodeType", "")
    if node_type == "ElementaryTypeName":
        return ElementaryTypeName(raw.get("name", ""))
    if node_type == "ArrayTypeName":
        base = _compact_type_name(raw.get("baseType")) or OtherTypeName("")
        return ArrayTypeName(base, dynamic=raw.get("length") is None)
    if node_type == "Mapping":
        return MappingTypeName(
            _compact_type_name(raw.get("keyType")) or OtherTypeName(""),
            _compact_type_name(raw.get("valueType")) or OtherTypeName(""),
        )
    if node_type == "UserDefinedTypeName":
        return UserDefinedTypeName(raw.get("name") or (raw.get("pathNode") or {}).get("name", ""))
    return OtherTypeName(node_type)


def _legacy_type_name(raw: Optional[dict[str, Any]]) -> Optional[TypeName]:
    if not raw:
        return None
    name = raw.get("name", "")
    attrs = raw.get("attributes", {}) or {}
    children = raw.get("children", []) or []
    if name == "ElementaryTypeName":
        return ElementaryTypeName(attrs.get("name", attrs.get("type", "")))
    if name == "ArrayTypeName":
        base = _legacy_type_name(children[0]) if children else None
        # a second child is the length expression
        return ArrayTypeName(base or OtherTypeName(""), dynamic=len(children) < 2)
    if name == "Mapping":
        key = _legacy_type_name(children[0]) if children else None
        value = _legacy_type_name(children[1]) if len(children) > 1 else None
        return MappingTypeName(key or OtherTypeName(""), value or OtherTypeName(""))
    if name == "UserDefinedTypeName":
        return UserDefinedTypeName(attrs.get("name", ""))
    return OtherTypeName(name)


def _parse_compact(raw: dict[str, Any]) -> Node:
    node_type = raw["nodeType"]
    src = Src.parse(raw.get("src"))
    children = tuple(_parse_compact(c) for c in _compact_children(raw))
    if node_type == "VariableDeclaration":
        return VariableDeclaration(
            node_type, src, children,
            name=raw.get("name", ""),
            type_name=_compact_type_name(raw.get("typeName")),
        )
    return Node(node_type, src, children)


def _parse_legacy(raw: dict[str, Any]) -> Node:
    node_type = raw.get("name", "")
    src = Src.parse(raw.get("src"))
    raw_children = [c for c in raw.get("children", []) or [] if isinstance(c, dict)]
    children = tuple(_parse_legacy(c) for c in raw_children)
    if node_type == "VariableDeclaration":
        attrs = raw.get("attributes", {}) or {}
        return VariableDeclaration(
            node_type, src, children,
            name=attrs.get("name", ""),
            type_name=_legacy_type_name(raw_children[0]) if raw_children else None,
        )
    return Node(node_type, src, children)


def parse_ast(raw: Optional[dict[str, Any]]) -> Optional[Node]:
    """Build the typed tree from a solc JSON AST; None for a missing AST."""
    if not raw:
        return None
    if _is_compact(raw):
        return _parse_compact(raw)
    return _parse_legacy(raw)
