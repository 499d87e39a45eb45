"""
Container traversal.

Walks the top level of a source unit and every namespace nested in it,
dispatching each type declaration to its member extractor.
"""

import logging
from typing import Callable, Dict, Iterable, Tuple

from tree_sitter import Node, Tree

from docextract.config import COMMENT_NODE, DEFAULT_UNIT_ID, DeclarationKind
from docextract.grammars.base import GrammarAdapter
from docextract.members import extract_class, extract_enum, extract_interface, extract_struct
from docextract.models import ExtractionError, SourceUnitResult

logger = logging.getLogger(__name__)

# Kind -> (extractor, result attribute)
_TYPE_HANDLERS: Dict[DeclarationKind, Tuple[Callable, str]] = {
    DeclarationKind.CLASS: (extract_class, "classes"),
    DeclarationKind.INTERFACE: (extract_interface, "interfaces"),
    DeclarationKind.STRUCT: (extract_struct, "structs"),
    DeclarationKind.ENUM: (extract_enum, "enums"),
}


def _extract_type(
    node: Node,
    kind: DeclarationKind,
    adapter: GrammarAdapter,
    result: SourceUnitResult,
) -> None:
    extractor, target = _TYPE_HANDLERS[kind]

    try:
        declaration = extractor(node, adapter)
    except ExtractionError as e:
        if e.unit_id is None:
            e.unit_id = result.unit_id
        logger.warning(f"Skipping {kind.value} at line {node.start_point.row + 1}: {e}")
        result.errors.append(e)
        return

    getattr(result, target).append(declaration)
    logger.debug(f"Extracted {kind.value} {declaration.name} from {result.unit_id}")


def walk_container(
    children: Iterable[Node],
    adapter: GrammarAdapter,
    result: SourceUnitResult,
    depth: int = 0,
) -> SourceUnitResult:
    """Classify the immediate children of a container and collect declarations.

    Namespaces are descended into recursively and their findings merged into
    ``result`` in encounter order. Unrecognized nodes are skipped.

    Args:
        children: The container's immediate child nodes.
        adapter: Grammar adapter for the source unit.
        result: Aggregate the findings are appended to.
        depth: Current namespace nesting depth.

    Returns:
        The ``result`` aggregate.
    """
    for child in children:
        if child.type == COMMENT_NODE or not child.is_named:
            continue

        node = adapter.resolve_declaration(child)
        kind = adapter.classify(node)

        if kind is None:
            logger.debug(f"Skipping {node.type} at line {node.start_point.row + 1}")
            continue

        if kind == DeclarationKind.NAMESPACE:
            nested = SourceUnitResult(unit_id=result.unit_id, grammar=result.grammar)
            walk_container(adapter.container_children(node), adapter, nested, depth + 1)
            logger.debug(
                f"Namespace at line {node.start_point.row + 1} (depth {depth + 1}) "
                f"yielded {nested.declaration_count} declarations"
            )
            result.merge(nested)
            continue

        _extract_type(node, kind, adapter, result)

    return result


def extract_declarations_from_tree(
    tree: Tree,
    adapter: GrammarAdapter,
    unit_id: str = DEFAULT_UNIT_ID,
) -> SourceUnitResult:
    """Extract all type declarations from a parsed source unit.

    This is the main entry point for declaration extraction.

    Args:
        tree: The parsed syntax tree.
        adapter: Grammar adapter matching the tree's language.
        unit_id: Identifier of the source unit, used in results and errors.

    Returns:
        A SourceUnitResult with classes, interfaces, structs and enums in
        encounter order, plus any per-declaration errors.
    """
    logger.info(f"Extracting declarations from {unit_id}")
    result = SourceUnitResult(unit_id=unit_id, grammar=adapter.name)
    walk_container(tree.root_node.children, adapter, result)

    if result.errors:
        logger.warning(f"{len(result.errors)} declarations in {unit_id} could not be extracted")
    logger.info(f"Extracted {result.declaration_count} declarations from {unit_id}")
    return result
