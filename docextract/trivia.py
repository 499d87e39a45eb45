"""
Documentation comment lookup.

Finds the documentation comment block attached to a declaration node and
returns the raw text of one of its sections. In tree-sitter trees comments are
sibling nodes, so the leading annotations of a declaration are the comment
nodes that directly precede it.
"""

import logging
import re
from typing import AbstractSet, List, Optional

from tree_sitter import Node

from docextract.config import COMMENT_NODE, ERROR_NODE, DocTag
from docextract.parser import node_text

logger = logging.getLogger(__name__)


def is_doc_comment(comment_text: str, marker: str) -> bool:
    """Check if a comment is a documentation comment line.

    A run of four marker characters (``////`` or ``''''``) is an ordinary
    comment.

    Args:
        comment_text: The text content of the comment.
        marker: The grammar's documentation marker.

    Returns:
        True if the comment starts with exactly the documentation marker.
    """
    stripped = comment_text.strip()
    return stripped.startswith(marker) and not stripped.startswith(marker + marker[-1])


def _is_layout(node: Node, layout_node_types: AbstractSet[str]) -> bool:
    if node.type in layout_node_types:
        return True
    # Error recovery can leave a bare line break as its own node
    return node.type == ERROR_NODE and not (node_text(node) or "").strip()


def get_leading_comments(node: Node, layout_node_types: AbstractSet[str]) -> List[Node]:
    """Collect the comment nodes that directly precede ``node``.

    Walks backward through siblings, passing over layout nodes, and stops at
    the first sibling that is neither a comment nor layout.

    Args:
        node: The anchor node of a declaration.
        layout_node_types: Sibling types that do not end the leading trivia.

    Returns:
        Comment nodes in source order.
    """
    comments = []
    sibling = node.prev_sibling

    while sibling is not None:
        if sibling.type == COMMENT_NODE:
            comments.append(sibling)
        elif not _is_layout(sibling, layout_node_types):
            break
        sibling = sibling.prev_sibling

    comments.reverse()
    return comments


def group_doc_blocks(comments: List[Node], marker: str) -> List[List[str]]:
    """Group documentation comment lines into blocks.

    A block is a run of documentation lines on consecutive rows. Ordinary
    comments and row gaps end a block.

    Args:
        comments: Comment nodes in source order.
        marker: The grammar's documentation marker.

    Returns:
        Blocks of raw comment lines, markers included.
    """
    blocks: List[List[str]] = []
    current: List[str] = []
    last_row = None

    for comment in comments:
        text = node_text(comment) or ""
        if not is_doc_comment(text, marker):
            if current:
                blocks.append(current)
            current = []
            last_row = None
            continue

        if current and last_row is not None and comment.start_point.row - last_row > 1:
            blocks.append(current)
            current = []

        current.append(text.strip())
        last_row = comment.end_point.row

    if current:
        blocks.append(current)
    return blocks


# Matches one element tag. A "<" that does not start a tag name (as in
# "a < b") is prose.
_XML_TAG = re.compile(r"<(/?)([A-Za-z_][\w:.\-]*)[^<>]*?(/?)>")


def find_top_level_section(block_text: str, tag: DocTag) -> Optional[str]:
    """Return the first top-level ``tag`` element of a documentation block.

    The block is scanned tag by tag instead of being parsed as a document, so
    prose such as ``R&D`` or ``a < b`` and malformed sibling sections do not
    hide a well-formed section. Unclosed child elements are closed implicitly
    by their parent's end tag. Self-closing elements carry no text and never
    count as a section.

    Returns:
        The element's raw text from its start tag to its end tag, or None when
        the block has no closed top-level ``tag`` element.
    """
    open_elements: List[str] = []
    section_start: Optional[int] = None

    for match in _XML_TAG.finditer(block_text):
        closing, name, self_closing = match.groups()
        if self_closing:
            continue

        if not closing:
            if not open_elements and name == tag.value:
                section_start = match.start()
            open_elements.append(name)
            continue

        if name not in open_elements:
            continue
        while open_elements.pop() != name:
            pass

        if not open_elements and section_start is not None:
            return block_text[section_start:match.end()]

    if section_start is not None:
        logger.debug(f"Unclosed <{tag.value}> section in documentation block")
    return None


def find_doc_section(
    node: Node,
    tag: DocTag,
    marker: str,
    layout_node_types: AbstractSet[str],
) -> Optional[str]:
    """Find the raw text of one documentation section attached to ``node``.

    Blocks are searched in source order; the first block with a top-level
    element named ``tag`` wins. Only ``tag`` is searched.

    Args:
        node: The anchor node of a declaration.
        tag: The section to look for.
        marker: The grammar's documentation marker.
        layout_node_types: Sibling types skipped while collecting comments.

    Returns:
        The section's raw text (tags and per-line markers included), or None
        if the node is undocumented or no block has a closed ``tag`` section.
    """
    comments = get_leading_comments(node, layout_node_types)
    if not comments:
        return None

    for lines in group_doc_blocks(comments, marker):
        section = find_top_level_section("\n".join(lines), tag)
        if section is not None:
            return section

    return None
