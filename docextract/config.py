"""
Configuration constants for declaration extraction.

Defines the documentation tags, sentinel format and the shared node type
strings used by both grammar adapters.
"""

from enum import Enum
from typing import Set


class DocTag(str, Enum):
    """Documentation sections the engine reads from a doc comment block."""

    SUMMARY = "summary"
    RETURNS = "returns"


class DeclarationKind(str, Enum):
    """Closed set of container-level node kinds the walker dispatches on."""

    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"
    NAMESPACE = "namespace"


class MemberKind(str, Enum):
    """Closed set of member node kinds read from a type declaration."""

    PROPERTY = "property"
    FIELD = "field"
    METHOD = "method"
    ENUM_MEMBER = "enum_member"


# Placeholder emitted when a section is not documented: " NO SUMMARY "
SENTINEL_TEMPLATE: str = " NO {tag} "

# Comment node type (tree-sitter name shared by both grammars)
COMMENT_NODE: str = "comment"

# Node type tree-sitter uses for error recovery
ERROR_NODE: str = "ERROR"

# Directories never descended into during file discovery
DEFAULT_EXCLUDE_DIRS: Set[str] = {
    "bin",
    "obj",
    "packages",
    "node_modules",
    ".vs",
    "TestResults",
    "publish",
}

# Extraction policy defaults
DEFAULT_CONTINUE_ON_ERROR: bool = True
DEFAULT_UNIT_ID: str = "<memory>"
