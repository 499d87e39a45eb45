"""
C# grammar adapter (tree-sitter-c-sharp).
"""

from typing import List, Optional, Tuple

from tree_sitter import Node

from docextract.classifier import build_primitive_table
from docextract.config import COMMENT_NODE, DeclarationKind, MemberKind
from docextract.grammars.base import GrammarAdapter
from docextract.parser import CSHARP, CSHARP_LANGUAGE, node_text

CSHARP_PRIMITIVE_TYPES = build_primitive_table([
    "int", "bool", "sbyte", "byte", "short", "ushort",
    "int16", "uint16", "int32", "uint32", "int64", "uint64",
    "uint", "long", "ulong", "single", "double", "decimal",
    "char", "float", "void",
])

# Directives that sit between a doc comment and its declaration
CSHARP_LAYOUT_NODES = frozenset({
    "preproc_region",
    "preproc_endregion",
    "preproc_pragma",
    "preproc_nullable",
    "preproc_define",
    "preproc_undef",
    "preproc_line",
    "preproc_warning",
    "preproc_error",
})


class CSharpAdapter(GrammarAdapter):
    """Adapter for C# compilation units.

    File-scoped namespaces (``namespace Foo;``) need no special handling:
    tree-sitter places their members as siblings at the root.
    """

    name = CSHARP
    language = CSHARP_LANGUAGE
    extensions = (".cs",)
    doc_marker = "///"
    primitive_types = CSHARP_PRIMITIVE_TYPES
    layout_node_types = CSHARP_LAYOUT_NODES
    declaration_kinds = {
        "class_declaration": DeclarationKind.CLASS,
        "interface_declaration": DeclarationKind.INTERFACE,
        "struct_declaration": DeclarationKind.STRUCT,
        "enum_declaration": DeclarationKind.ENUM,
        "namespace_declaration": DeclarationKind.NAMESPACE,
    }
    member_kinds = {
        "property_declaration": MemberKind.PROPERTY,
        "field_declaration": MemberKind.FIELD,
        "method_declaration": MemberKind.METHOD,
        "enum_member_declaration": MemberKind.ENUM_MEMBER,
    }

    def container_children(self, node: Node) -> List[Node]:
        body = node.child_by_field_name("body")
        if body is None:
            return []
        return list(body.named_children)

    def field_variables(self, node: Node) -> List[Tuple[str, Optional[str]]]:
        declaration = next(
            (child for child in node.named_children if child.type == "variable_declaration"),
            None,
        )
        if declaration is None:
            return []

        type_name = node_text(declaration.child_by_field_name("type"))
        variables = []
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = self.declaration_name(declarator)
            if name:
                variables.append((name, type_name))
        return variables

    def method_return_type(self, node: Node) -> Optional[str]:
        return node_text(node.child_by_field_name("returns"))

    def base_types(self, node: Node) -> List[str]:
        base_list = next((child for child in node.children if child.type == "base_list"), None)
        if base_list is None:
            return []
        return [
            node_text(entry)
            for entry in base_list.named_children
            if entry.type != COMMENT_NODE
        ]
