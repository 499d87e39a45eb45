"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the C# and VB.NET parsers and
parse source files into syntax trees.
"""

import logging
from typing import Dict, Optional, Tuple

import tree_sitter_c_sharp as tscsharp
import tree_sitter_vb_dotnet as tsvb
from tree_sitter import Language, Node, Parser, Tree

from docextract.config import ERROR_NODE

# Configure logging
logger = logging.getLogger(__name__)

CSHARP: str = "csharp"
VISUAL_BASIC: str = "vb"

# Module-level language constants
CSHARP_LANGUAGE = Language(tscsharp.language())
VB_LANGUAGE = Language(tsvb.language())

LANGUAGES: Dict[str, Language] = {
    CSHARP: CSHARP_LANGUAGE,
    VISUAL_BASIC: VB_LANGUAGE,
}


def detect_grammar(file_path: str) -> str:
    """Detect the grammar of a source file from its extension.

    The extensions come from the registered grammar adapters.

    Args:
        file_path: Path to a .cs or .vb file.

    Returns:
        The grammar name ("csharp" or "vb").

    Raises:
        ValueError: If the extension is not supported.
    """
    # Adapters import this module, so the registry is looked up lazily
    from docextract.grammars import adapter_for_path

    return adapter_for_path(file_path).name


def create_parser(grammar: str) -> Parser:
    """Create and configure a tree-sitter parser for one grammar.

    Args:
        grammar: "csharp" or "vb".

    Returns:
        A Parser instance configured with the grammar's language.

    Raises:
        ValueError: If the grammar is unknown.

    Example:
        >>> parser = create_parser("csharp")
        >>> tree = parser.parse(b"class A {}")
    """
    language = LANGUAGES.get(grammar)
    if language is None:
        raise ValueError(f"Unknown grammar '{grammar}'. Expected one of: {sorted(LANGUAGES)}")
    parser = Parser(language)
    logger.debug("Created tree-sitter %s parser", grammar)
    return parser


def parse_bytes(source: bytes, grammar: str) -> Tree:
    """Parse raw bytes of C# or VB.NET source code.

    Args:
        source: UTF-8 encoded source bytes.
        grammar: "csharp" or "vb".

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"class A {}", "csharp")
        >>> tree.root_node.type
        'compilation_unit'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser(grammar)
    tree = parser.parse(source)

    if tree.root_node.has_error:
        logger.warning("Parsed tree contains syntax errors")

    logger.debug(f"Parsed {len(source)} bytes of {grammar} code")
    return tree


def parse_file(file_path: str, grammar: Optional[str] = None) -> Tuple[Tree, bytes, str]:
    """Parse a C# or VB.NET source file from disk.

    Args:
        file_path: Path to the .cs or .vb file.
        grammar: Grammar override; detected from the extension when None.

    Returns:
        A tuple of (Tree, source_bytes, grammar).

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be read.
        ValueError: If no grammar is given and the extension is unsupported.
    """
    if grammar is None:
        grammar = detect_grammar(file_path)

    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        raise
    except IOError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise

    tree = parse_bytes(source_bytes, grammar)

    if tree.root_node.has_error:
        logger.warning(f"File {file_path} contains syntax errors")

    logger.info(f"Successfully parsed file: {file_path}")
    return tree, source_bytes, grammar


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and missing nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == ERROR_NODE or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count


def node_text(node: Optional[Node]) -> Optional[str]:
    """Return the source text of a node, or None for an absent node."""
    if node is None or node.text is None:
        return None
    return node.text.decode("utf-8", errors="replace")
