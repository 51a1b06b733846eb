"""
Shared sample contract for normalizer, pipeline and CLI tests.

Layout of ``SOURCE`` (offsets)::

    0   contract Store {
    17      uint[] public xs;        decl 21:16, dynamic array
    39      uint public y;           decl 43:13
    58  }

Deployed code ``6080604052 00`` has instructions at offsets 0, 2, 4, 5.
The source map gives instruction 1 the ``xs`` declaration and
instruction 2 the ``y`` declaration.
"""

import copy

import pytest

SOURCE_PATH = "/project/contracts/Store.sol"
SOURCE = "contract Store {\n    uint[] public xs;\n    uint public y;\n}\n"

AST = {
    "nodeType": "SourceUnit",
    "src": "0:60:0",
    "nodes": [
        {
            "nodeType": "ContractDefinition",
            "name": "Store",
            "src": "0:59:0",
            "nodes": [
                {
                    "nodeType": "VariableDeclaration",
                    "name": "xs",
                    "src": "21:16:0",
                    "stateVariable": True,
                    "visibility": "public",
                    "typeName": {
                        "nodeType": "ArrayTypeName",
                        "src": "21:6:0",
                        "baseType": {"nodeType": "ElementaryTypeName", "name": "uint", "src": "21:4:0"},
                        "length": None,
                    },
                },
                {
                    "nodeType": "VariableDeclaration",
                    "name": "y",
                    "src": "43:13:0",
                    "stateVariable": True,
                    "visibility": "public",
                    "typeName": {"nodeType": "ElementaryTypeName", "name": "uint", "src": "43:4:0"},
                },
            ],
        }
    ],
}

BUILD = {
    "contractName": "Store",
    "bytecode": "0x6080604052",
    "deployedBytecode": "0x608060405200",
    "sourceMap": "0:59:0:-",
    "deployedSourceMap": "0:59:0:-;21:16;43:13;0:59",
    "sourcePath": SOURCE_PATH,
    "source": SOURCE,
    "ast": AST,
}


def scanner_result(source_format="evm-byzantium-bytecode", locations=("4:1:0",), severity="High"):
    """One scanner analysis result with a single issue."""
    return {
        "sourceFormat": source_format,
        "sourceList": [SOURCE_PATH],
        "sourceType": "raw-bytecode",
        "issues": [
            {
                "swcID": "SWC-101",
                "swcTitle": "Integer Overflow and Underflow",
                "description": {"head": "Head message", "tail": "Tail message"},
                "severity": severity,
                "locations": [{"sourceMap": loc} for loc in locations],
            }
        ],
    }


@pytest.fixture
def build():
    return copy.deepcopy(BUILD)
