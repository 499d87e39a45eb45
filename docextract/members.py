"""
Member extraction for type declarations.

Builds class, interface, struct and enum records from their declaration
nodes. Every node-shape question is delegated to the grammar adapter.
"""

import logging
from typing import Dict, List, Optional, Sequence

from tree_sitter import Node

from docextract.config import DocTag, MemberKind
from docextract.grammars.base import GrammarAdapter
from docextract.models import (
    ClassDeclaration,
    Declaration,
    EnumDeclaration,
    ExtractionError,
    InterfaceDeclaration,
    StructDeclaration,
)

logger = logging.getLogger(__name__)

TYPE_MEMBER_KINDS = (MemberKind.PROPERTY, MemberKind.FIELD, MemberKind.METHOD)
INTERFACE_MEMBER_KINDS = (MemberKind.PROPERTY, MemberKind.METHOD)


def _require_name(node: Node, adapter: GrammarAdapter, owner: Optional[str] = None) -> str:
    name = adapter.declaration_name(node)
    if not name:
        raise ExtractionError(
            f"{node.type} at line {node.start_point.row + 1} has no name",
            declaration_name=owner,
        )
    return name


def _or_absent(items: Sequence[Declaration]) -> Optional[List[Declaration]]:
    """Return the items as a list, or None when there are none."""
    if not items:
        return None
    return list(items)


def build_property(node: Node, adapter: GrammarAdapter, owner: Optional[str] = None) -> Declaration:
    type_name = adapter.property_type(node)
    return Declaration(
        name=_require_name(node, adapter, owner),
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
        type_name=type_name,
        is_primitive_type=adapter.is_primitive(type_name),
    )


def build_fields(node: Node, adapter: GrammarAdapter, owner: Optional[str] = None) -> List[Declaration]:
    """Build one record per name declared by a field statement.

    All names of a grouped statement share its documentation comment.
    """
    variables = adapter.field_variables(node)
    if not variables:
        raise ExtractionError(
            f"{node.type} at line {node.start_point.row + 1} declares no names",
            declaration_name=owner,
        )

    summary = adapter.read_documentation(node, DocTag.SUMMARY)
    return [
        Declaration(
            name=name,
            summary_text=summary,
            type_name=type_name,
            is_primitive_type=adapter.is_primitive(type_name),
        )
        for name, type_name in variables
    ]


def build_method(node: Node, adapter: GrammarAdapter, owner: Optional[str] = None) -> Declaration:
    return_type = adapter.method_return_type(node)
    method = Declaration(
        name=_require_name(node, adapter, owner),
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
        type_name=return_type,
        returns_text=adapter.read_documentation(node, DocTag.RETURNS),
        is_primitive_type=adapter.is_primitive(return_type),
    )
    method.attach_parameters(adapter.method_parameters(node))
    return method


def build_enum_member(node: Node, adapter: GrammarAdapter, owner: Optional[str] = None) -> Declaration:
    return Declaration(
        name=_require_name(node, adapter, owner),
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
    )


def collect_members(
    node: Node,
    adapter: GrammarAdapter,
    kinds: Sequence[MemberKind],
    owner: Optional[str] = None,
) -> Dict[MemberKind, List[Declaration]]:
    """Partition the direct members of a type declaration by kind.

    Args:
        node: The type declaration node.
        adapter: Grammar adapter for the source unit.
        kinds: Member kinds to collect; other members are skipped.
        owner: Name of the declaring type, used in error context.

    Returns:
        A mapping with one list per requested kind, in source order.
    """
    collected: Dict[MemberKind, List[Declaration]] = {kind: [] for kind in kinds}

    for member in adapter.member_nodes(node):
        kind = adapter.member_kind(member)
        if kind not in collected:
            continue

        if kind == MemberKind.FIELD:
            collected[kind].extend(build_fields(member, adapter, owner))
        elif kind == MemberKind.METHOD:
            collected[kind].append(build_method(member, adapter, owner))
        elif kind == MemberKind.PROPERTY:
            collected[kind].append(build_property(member, adapter, owner))
        else:
            collected[kind].append(build_enum_member(member, adapter, owner))

    return collected


def extract_class(node: Node, adapter: GrammarAdapter) -> ClassDeclaration:
    name = _require_name(node, adapter)
    members = collect_members(node, adapter, TYPE_MEMBER_KINDS, owner=name)
    return ClassDeclaration(
        name=name,
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
        properties=_or_absent(members[MemberKind.PROPERTY]),
        fields=_or_absent(members[MemberKind.FIELD]),
        methods=_or_absent(members[MemberKind.METHOD]),
        base_types=adapter.base_types(node),
    )


def extract_interface(node: Node, adapter: GrammarAdapter) -> InterfaceDeclaration:
    name = _require_name(node, adapter)
    members = collect_members(node, adapter, INTERFACE_MEMBER_KINDS, owner=name)
    return InterfaceDeclaration(
        name=name,
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
        properties=_or_absent(members[MemberKind.PROPERTY]),
        methods=_or_absent(members[MemberKind.METHOD]),
    )


def extract_struct(node: Node, adapter: GrammarAdapter) -> StructDeclaration:
    name = _require_name(node, adapter)
    members = collect_members(node, adapter, TYPE_MEMBER_KINDS, owner=name)
    return StructDeclaration(
        name=name,
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
        properties=_or_absent(members[MemberKind.PROPERTY]),
        fields=_or_absent(members[MemberKind.FIELD]),
        methods=_or_absent(members[MemberKind.METHOD]),
    )


def extract_enum(node: Node, adapter: GrammarAdapter) -> EnumDeclaration:
    name = _require_name(node, adapter)
    members = collect_members(node, adapter, (MemberKind.ENUM_MEMBER,), owner=name)
    return EnumDeclaration(
        name=name,
        summary_text=adapter.read_documentation(node, DocTag.SUMMARY),
        members=members[MemberKind.ENUM_MEMBER],
    )
