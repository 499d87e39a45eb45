"""
High-level orchestrator for declaration extraction.

This module provides the main entry points for extracting declarations from
in-memory sources, single files or entire directory trees.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from core.structured_logging import unit_scope
from docextract.config import DEFAULT_CONTINUE_ON_ERROR, DEFAULT_EXCLUDE_DIRS, DEFAULT_UNIT_ID
from docextract.grammars import adapter_for_path, get_adapter, supported_extensions
from docextract.models import SourceUnitResult
from docextract.parser import count_error_nodes, parse_bytes, parse_file
from docextract.traversal import extract_declarations_from_tree

logger = logging.getLogger(__name__)


@dataclass
class FileExtractionDiagnostics:
    """Per-file extraction diagnostics."""

    result: SourceUnitResult
    parse_error_count: int


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.declarations_extracted = 0
        self.declaration_errors = 0
        self.parse_errors = 0

    def record(self, diagnostics: FileExtractionDiagnostics) -> None:
        """Account for one successfully processed file."""
        self.files_processed += 1
        self.declarations_extracted += diagnostics.result.declaration_count
        self.declaration_errors += len(diagnostics.result.errors)
        self.parse_errors += diagnostics.parse_error_count

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "declarations_extracted": self.declarations_extracted,
            "declaration_errors": self.declaration_errors,
            "parse_errors": self.parse_errors,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, declarations={self.declarations_extracted}, "
            f"declaration_errors={self.declaration_errors}, "
            f"parse_errors={self.parse_errors})"
        )


def extract_source(
    source: bytes,
    grammar: str,
    unit_id: str = DEFAULT_UNIT_ID,
) -> SourceUnitResult:
    """Extract declarations from in-memory source code.

    Args:
        source: UTF-8 encoded source bytes.
        grammar: "csharp" or "vb".
        unit_id: Identifier reported in the result.

    Returns:
        The SourceUnitResult for the source.

    Raises:
        ValueError: If the grammar is unknown.
        TypeError: If source is not bytes.

    Example:
        >>> result = extract_source(b"class A {}", "csharp")
        >>> [c.name for c in result.classes]
        ['A']
    """
    adapter = get_adapter(grammar)
    tree = parse_bytes(source, grammar)
    return extract_declarations_from_tree(tree, adapter, unit_id)


def _extract_file_with_diagnostics(
    file_path: str,
    grammar: Optional[str],
    root: Optional[str],
) -> FileExtractionDiagnostics:
    """Extract declarations from a single file with parse diagnostics."""
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    adapter = get_adapter(grammar) if grammar else adapter_for_path(file_path)

    if root is None:
        resolved_root = os.path.dirname(file_path)
    else:
        resolved_root = os.path.abspath(root)

    try:
        relative_path = os.path.relpath(file_path, resolved_root)
    except ValueError:
        logger.warning(
            "Cannot compute relative path for %s from %s. Using absolute path.",
            file_path,
            resolved_root,
        )
        relative_path = file_path

    with unit_scope(relative_path):
        tree, _source_bytes, _grammar = parse_file(file_path, adapter.name)
        parse_error_count = count_error_nodes(tree)

        if tree.root_node.has_error:
            logger.warning(
                "File %s contains syntax errors (%d error nodes)",
                relative_path,
                parse_error_count,
            )

        result = extract_declarations_from_tree(tree, adapter, unit_id=relative_path)
    return FileExtractionDiagnostics(result=result, parse_error_count=parse_error_count)


def extract_file(
    file_path: str,
    grammar: Optional[str] = None,
    root: Optional[str] = None,
) -> SourceUnitResult:
    """Extract all declarations from a single C# or VB.NET source file.

    Args:
        file_path: Absolute or relative path to the source file.
        grammar: Grammar override. If None, chosen by file extension.
        root: Directory the unit id is computed relative to. If None, uses
            the file's parent directory.

    Returns:
        The SourceUnitResult for the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no grammar handles the file.

    Example:
        >>> result = extract_file("src/Widget.cs", root="src")
        >>> result.unit_id
        'Widget.cs'
    """
    try:
        return _extract_file_with_diagnostics(file_path, grammar, root).result
    except (FileNotFoundError, ValueError) as e:
        logger.error("Error extracting declarations from %s: %s", file_path, e)
        raise


def discover_source_files(
    directory: str,
    extensions: Optional[Iterable[str]] = None,
    exclude_dirs: Optional[Iterable[str]] = None,
) -> List[str]:
    """Recursively discover all C# and VB.NET source files in a directory.

    Args:
        directory: Root directory to search.
        extensions: File extensions to accept. Defaults to every supported one.
        exclude_dirs: Directory names never descended into. Defaults to
            build output and tooling directories.

    Returns:
        Sorted list of absolute paths.
    """
    accepted = {ext.lower() for ext in (extensions or supported_extensions())}
    excluded = set(DEFAULT_EXCLUDE_DIRS if exclude_dirs is None else exclude_dirs)
    source_files = []
    directory = os.path.abspath(directory)

    logger.info(f"Discovering source files in {directory}")

    for root, dirs, files in os.walk(directory):
        # Skip hidden directories and build output
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in excluded]

        for file in files:
            ext = os.path.splitext(file)[1].lower()
            if ext in accepted:
                source_files.append(os.path.join(root, file))

    logger.info(f"Found {len(source_files)} source files")
    return sorted(source_files)


def iter_extract_results(
    source: str,
    grammar: Optional[str] = None,
    root: Optional[str] = None,
    continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
    exclude_dirs: Optional[Iterable[str]] = None,
    stats: Optional[ExtractionStats] = None,
) -> Iterator[SourceUnitResult]:
    """Stream one SourceUnitResult per file of a file or directory source.

    Args:
        source: Path to a file or directory.
        grammar: Grammar override applied to every file.
        root: Root for unit ids. Defaults to the directory itself, or the
            file's parent directory.
        continue_on_error: If True, log and count failing files and go on.
            If False, re-raise the first failure.
        exclude_dirs: Directory names skipped during discovery.
        stats: Optional stats object updated while iterating.

    Yields:
        SourceUnitResult objects in sorted file order.

    Raises:
        FileNotFoundError: If the source does not exist.
    """
    source = os.path.abspath(source)
    if stats is None:
        stats = ExtractionStats()

    if os.path.isfile(source):
        file_paths = [source]
        resolved_root = os.path.abspath(root) if root else os.path.dirname(source)
    elif os.path.isdir(source):
        extensions = get_adapter(grammar).extensions if grammar else None
        file_paths = discover_source_files(source, extensions, exclude_dirs)
        resolved_root = os.path.abspath(root) if root else source
        if not file_paths:
            logger.warning(f"No source files found in {source}")
    else:
        raise FileNotFoundError(f"Source not found: {source}")

    for file_path in file_paths:
        try:
            diagnostics = _extract_file_with_diagnostics(file_path, grammar, resolved_root)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Invalid file {file_path}: {e}")
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue
        except Exception as e:
            logger.error(f"Unexpected error processing {file_path}: {e}", exc_info=True)
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue

        stats.record(diagnostics)
        yield diagnostics.result


def extract_directory(
    directory: str,
    grammar: Optional[str] = None,
    root: Optional[str] = None,
    continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
    exclude_dirs: Optional[Iterable[str]] = None,
) -> Tuple[List[SourceUnitResult], ExtractionStats]:
    """Extract declarations from all source files in a directory tree.

    Args:
        directory: Root directory to process.
        grammar: Grammar override; restricts discovery to its extensions.
        root: Root for computing unit ids. If None, uses ``directory``.
        continue_on_error: If True, continue processing files even if some fail.
        exclude_dirs: Directory names skipped during discovery.

    Returns:
        A tuple of (results, stats).

    Raises:
        FileNotFoundError: If directory does not exist.

    Example:
        >>> results, stats = extract_directory("/path/to/solution")
        >>> print(f"{stats.declarations_extracted} declarations in {stats.files_processed} files")
    """
    directory = os.path.abspath(directory)
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    stats = ExtractionStats()
    results = list(
        iter_extract_results(
            directory,
            grammar=grammar,
            root=root,
            continue_on_error=continue_on_error,
            exclude_dirs=exclude_dirs,
            stats=stats,
        )
    )

    logger.info(f"Extraction complete: {stats}")
    return results, stats


def extract_to_dict_list(
    source: str,
    grammar: Optional[str] = None,
    root: Optional[str] = None,
    continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
) -> List[Dict[str, Any]]:
    """Extract declarations and return them as a list of dictionaries.

    Detects whether the source is a file or directory and returns results in
    dict format ready for JSON serialization.

    Args:
        source: Path to a file or directory.
        grammar: Grammar override.
        root: Root for computing unit ids.
        continue_on_error: If True, skip files that fail.

    Returns:
        One dictionary per source file.

    Example:
        >>> units = extract_to_dict_list("src/")
        >>> import json
        >>> json.dump(units, open("declarations.json", "w"), indent=2)
    """
    return [
        result.to_dict()
        for result in iter_extract_results(
            source, grammar=grammar, root=root, continue_on_error=continue_on_error
        )
    ]
