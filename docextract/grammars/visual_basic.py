"""
VB.NET grammar adapter (tree-sitter-vb-dotnet).

VB blocks hold their members as direct children, and every statement is
followed by a ``blank_line`` node. Type blocks are wrapped in a
``type_declaration`` node; type-level attributes and documentation comments
precede that wrapper.
"""

from typing import List, Optional, Tuple

from tree_sitter import Node

from docextract.classifier import build_primitive_table
from docextract.config import DeclarationKind, MemberKind
from docextract.grammars.base import GrammarAdapter
from docextract.parser import VB_LANGUAGE, VISUAL_BASIC, node_text

VB_PRIMITIVE_TYPES = build_primitive_table([
    "integer", "boolean", "sbyte", "byte", "short", "ushort",
    "uinteger", "long", "ulong", "int16", "uint16", "int32",
    "uint32", "int64", "uint64", "single", "double", "decimal",
    "char", "float", "void",
])

VB_LAYOUT_NODES = frozenset({
    "blank_line",
    "attribute_block",
    "preprocessor_directive",
})

TYPE_WRAPPER_NODE = "type_declaration"


def _as_clause_type(node: Node) -> Optional[str]:
    """Return the type written in a node's ``As`` clause."""
    as_clause = next((child for child in node.named_children if child.type == "as_clause"), None)
    if as_clause is None:
        return None
    return node_text(as_clause.child_by_field_name("type"))


class VisualBasicAdapter(GrammarAdapter):
    """Adapter for VB.NET source files.

    Modules are reported as classes. Base types of a class combine its
    ``Inherits`` and ``Implements`` clauses.
    """

    name = VISUAL_BASIC
    language = VB_LANGUAGE
    extensions = (".vb",)
    doc_marker = "'''"
    primitive_types = VB_PRIMITIVE_TYPES
    # Reported for a Sub, which has no As clause
    void_type = "Void"
    layout_node_types = VB_LAYOUT_NODES
    declaration_kinds = {
        "class_block": DeclarationKind.CLASS,
        "module_block": DeclarationKind.CLASS,
        "interface_block": DeclarationKind.INTERFACE,
        "structure_block": DeclarationKind.STRUCT,
        "enum_block": DeclarationKind.ENUM,
        "namespace_block": DeclarationKind.NAMESPACE,
    }
    member_kinds = {
        "property_declaration": MemberKind.PROPERTY,
        "field_declaration": MemberKind.FIELD,
        "method_declaration": MemberKind.METHOD,
        "enum_member": MemberKind.ENUM_MEMBER,
    }

    def resolve_declaration(self, node: Node) -> Node:
        if node.type != TYPE_WRAPPER_NODE:
            return node
        for child in node.named_children:
            if child.type in self.declaration_kinds:
                return child
        return node

    def doc_anchor(self, node: Node) -> Node:
        parent = node.parent
        if parent is not None and parent.type == TYPE_WRAPPER_NODE:
            return parent
        return node

    def member_nodes(self, node: Node) -> List[Node]:
        return list(node.named_children)

    def property_type(self, node: Node) -> Optional[str]:
        return _as_clause_type(node)

    def field_variables(self, node: Node) -> List[Tuple[str, Optional[str]]]:
        """Expand a field statement into ``(name, type_name)`` pairs.

        In ``Private x, y As Double`` only ``y`` carries the ``As`` clause; a
        declarator without one takes the type of the next declarator that has
        it. Array bounds written on the name are appended to the type.
        """
        declarators = [child for child in node.named_children if child.type == "variable_declarator"]

        variables: List[Tuple[str, Optional[str]]] = []
        shared_type = None
        for declarator in reversed(declarators):
            own_type = _as_clause_type(declarator)
            if own_type is not None:
                shared_type = own_type

            type_name = shared_type
            rank = next(
                (child for child in declarator.named_children if child.type == "array_rank_specifier"),
                None,
            )
            if type_name is not None and rank is not None:
                type_name = f"{type_name}{node_text(rank)}"

            name = self.declaration_name(declarator)
            if name:
                variables.append((name, type_name))

        variables.reverse()
        return variables

    def method_return_type(self, node: Node) -> Optional[str]:
        return_type = node.child_by_field_name("return_type")
        if return_type is None:
            return self.void_type
        return node_text(return_type)

    def method_parameters(self, node: Node) -> List[str]:
        # The grammar hides the commas, every parameter is its own node
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is None:
            return []
        return [
            node_text(child)
            for child in parameter_list.named_children
            if child.type == "parameter"
        ]

    def base_types(self, node: Node) -> List[str]:
        bases = []
        for field_name in ("inherits", "implements"):
            for clause in node.children_by_field_name(field_name):
                bases.extend(
                    node_text(entry) for entry in clause.named_children if entry.type == "type"
                )
        return bases
