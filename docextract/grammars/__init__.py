"""
Grammar adapter registry.

Selects the adapter for a grammar name or a source file path.
"""

import os
from typing import Dict, Tuple

from docextract.grammars.base import GrammarAdapter
from docextract.grammars.csharp import CSharpAdapter
from docextract.grammars.visual_basic import VisualBasicAdapter

_ADAPTERS: Dict[str, GrammarAdapter] = {
    adapter.name: adapter for adapter in (CSharpAdapter(), VisualBasicAdapter())
}

SUPPORTED_GRAMMARS: Tuple[str, ...] = tuple(sorted(_ADAPTERS))


def get_adapter(grammar: str) -> GrammarAdapter:
    """Return the adapter registered for ``grammar``.

    Raises:
        ValueError: If the grammar is not supported.
    """
    adapter = _ADAPTERS.get(grammar)
    if adapter is None:
        raise ValueError(f"Unknown grammar '{grammar}'. Expected one of: {list(SUPPORTED_GRAMMARS)}")
    return adapter


def adapter_for_path(file_path: str) -> GrammarAdapter:
    """Return the adapter whose extensions match ``file_path``.

    Raises:
        ValueError: If no adapter handles the file's extension.
    """
    ext = os.path.splitext(file_path)[1].lower()
    for adapter in _ADAPTERS.values():
        if ext in adapter.extensions:
            return adapter
    raise ValueError(f"No grammar handles files with extension '{ext}' ({file_path})")


def supported_extensions() -> Tuple[str, ...]:
    """Return every file extension handled by a registered adapter."""
    return tuple(sorted(ext for adapter in _ADAPTERS.values() for ext in adapter.extensions))


__all__ = [
    "GrammarAdapter",
    "CSharpAdapter",
    "VisualBasicAdapter",
    "SUPPORTED_GRAMMARS",
    "get_adapter",
    "adapter_for_path",
    "supported_extensions",
]
