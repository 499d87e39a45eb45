"""
Shared grammar adapter.

A grammar adapter maps the node shapes of one tree-sitter grammar onto the
extraction pipeline. The traversal and member extraction code only talks to
adapters, so C# and VB.NET sources converge on one result schema.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, List, Optional, Tuple

from tree_sitter import Language, Node

from docextract.classifier import is_primitive_type
from docextract.config import COMMENT_NODE, DeclarationKind, DocTag, MemberKind
from docextract.models import undocumented
from docextract.normalizer import clean_doc_comment
from docextract.parser import node_text
from docextract.trivia import find_doc_section

logger = logging.getLogger(__name__)

# Punctuation inside a parameter list
LIST_SEPARATOR: str = ","
LIST_DELIMITERS: FrozenSet[str] = frozenset({"(", ")"})


def span_text(parent: Node, first: Node, last: Node) -> str:
    """Return the source text from the start of ``first`` to the end of ``last``.

    Both nodes must be descendants of ``parent``.
    """
    source = parent.text or b""
    start = first.start_byte - parent.start_byte
    end = last.end_byte - parent.start_byte
    return source[start:end].decode("utf-8", errors="replace")


class GrammarAdapter(ABC):
    """Base class for grammar adapters.

    Subclasses provide the grammar configuration as class attributes and
    override the node-shape hooks whose default does not fit their grammar.
    Field variables and method return types have no shared shape, so every
    adapter implements those two hooks.

    Attributes:
        name: Grammar name used by the registry ("csharp", "vb").
        language: The tree-sitter Language of the grammar.
        extensions: Source file extensions handled by the grammar.
        doc_marker: Per-line documentation comment marker.
        primitive_types: Lower-cased primitive type spellings.
        layout_node_types: Sibling node types passed over while collecting
            leading comments.
        declaration_kinds: Node type to container-level kind.
        member_kinds: Node type to member kind.
    """

    name: str = ""
    language: Optional[Language] = None
    extensions: Tuple[str, ...] = ()
    doc_marker: str = ""
    primitive_types: FrozenSet[str] = frozenset()
    layout_node_types: FrozenSet[str] = frozenset()
    declaration_kinds: Dict[str, DeclarationKind] = {}
    member_kinds: Dict[str, MemberKind] = {}

    # -- container level ---------------------------------------------------

    def resolve_declaration(self, node: Node) -> Node:
        """Return the node that carries a declaration's shape."""
        return node

    def classify(self, node: Node) -> Optional[DeclarationKind]:
        """Return the container-level kind of ``node``, or None when unrecognized."""
        return self.declaration_kinds.get(node.type)

    def container_children(self, node: Node) -> List[Node]:
        """Return the immediate children of a namespace-like container."""
        return list(node.named_children)

    def declaration_name(self, node: Node) -> Optional[str]:
        """Return the identifier text of a declaration or member node."""
        return node_text(node.child_by_field_name("name"))

    def doc_anchor(self, node: Node) -> Node:
        """Return the node whose leading siblings hold the documentation."""
        return node

    # -- members -----------------------------------------------------------

    def member_nodes(self, node: Node) -> List[Node]:
        """Return the direct member nodes of a type declaration, in source order."""
        body = node.child_by_field_name("body")
        if body is None:
            return []
        return list(body.named_children)

    def member_kind(self, node: Node) -> Optional[MemberKind]:
        return self.member_kinds.get(node.type)

    def property_type(self, node: Node) -> Optional[str]:
        return node_text(node.child_by_field_name("type"))

    @abstractmethod
    def field_variables(self, node: Node) -> List[Tuple[str, Optional[str]]]:
        """Return ``(name, type_name)`` for every name a field statement declares."""

    @abstractmethod
    def method_return_type(self, node: Node) -> Optional[str]:
        """Return the written return type of a method declaration."""

    def method_parameters(self, node: Node) -> List[str]:
        """Return the written text of each parameter of a method, in order.

        The parameter list is split on its top-level commas, so parameters the
        grammar does not wrap in a single node keep their full text.
        """
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is None:
            return []

        parameters = []
        group: List[Node] = []
        for child in parameter_list.children:
            if child.type in LIST_DELIMITERS or child.type == COMMENT_NODE:
                continue
            if child.type == LIST_SEPARATOR:
                if group:
                    parameters.append(span_text(parameter_list, group[0], group[-1]))
                group = []
                continue
            group.append(child)

        if group:
            parameters.append(span_text(parameter_list, group[0], group[-1]))
        return parameters

    def base_types(self, node: Node) -> List[str]:
        """Return the written base types of a class declaration."""
        return []

    # -- documentation and types ------------------------------------------

    def read_documentation(self, node: Node, tag: DocTag) -> str:
        """Read one documentation section of ``node``.

        Returns:
            The cleaned section text, or the placeholder for ``tag`` when the
            node has no such section.
        """
        raw = find_doc_section(
            self.doc_anchor(node), tag, self.doc_marker, self.layout_node_types
        )
        if raw is None:
            return undocumented(tag)
        return clean_doc_comment(raw, tag, self.doc_marker)

    def is_primitive(self, type_name: Optional[str]) -> bool:
        return is_primitive_type(type_name, self.primitive_types)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
