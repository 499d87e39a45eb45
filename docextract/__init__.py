"""
Declaration Extraction Engine

Tree-sitter-based C# and VB.NET declaration extractor.
Pairs classes, interfaces, structs, enums and their members with their
XML documentation comments.
"""

from docextract.config import DeclarationKind, DocTag, MemberKind
from docextract.models import (
    ClassDeclaration,
    Declaration,
    EnumDeclaration,
    ExtractionError,
    InterfaceDeclaration,
    SourceUnitResult,
    StructDeclaration,
    is_undocumented,
    undocumented,
)
from docextract.parser import create_parser, parse_file, parse_bytes, count_error_nodes, detect_grammar
from docextract.grammars import (
    SUPPORTED_GRAMMARS,
    GrammarAdapter,
    adapter_for_path,
    get_adapter,
    supported_extensions,
)
from docextract.traversal import extract_declarations_from_tree
from docextract.extractor import (
    extract_source,
    extract_file,
    extract_directory,
    extract_to_dict_list,
    iter_extract_results,
    discover_source_files,
    ExtractionStats,
)

__all__ = [
    # Data models
    "Declaration",
    "ClassDeclaration",
    "InterfaceDeclaration",
    "StructDeclaration",
    "EnumDeclaration",
    "SourceUnitResult",
    "ExtractionError",
    "ExtractionStats",
    "DeclarationKind",
    "DocTag",
    "MemberKind",
    "undocumented",
    "is_undocumented",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "count_error_nodes",
    "detect_grammar",
    # Grammar adapters
    "GrammarAdapter",
    "SUPPORTED_GRAMMARS",
    "get_adapter",
    "adapter_for_path",
    "supported_extensions",
    # Mid-level extraction
    "extract_declarations_from_tree",
    # High-level orchestration
    "extract_source",
    "extract_file",
    "extract_directory",
    "extract_to_dict_list",
    "iter_extract_results",
    "discover_source_files",
]
