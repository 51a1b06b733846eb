"""Typed Solidity AST used for node classification."""

from .nodes import (
    ArrayTypeName,
    Node,
    NodeKind,
    VariableDeclaration,
    classify,
    find_enclosing,
    is_dynamic_array_declaration,
    parse_ast,
)

__all__ = [
    "ArrayTypeName",
    "Node",
    "NodeKind",
    "VariableDeclaration",
    "classify",
    "find_enclosing",
    "is_dynamic_array_declaration",
    "parse_ast",
]
