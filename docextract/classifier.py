"""
Primitive type classification.

The lookup tables themselves belong to the grammar adapters; this module only
applies them.
"""

from typing import AbstractSet, Iterable, Optional


def build_primitive_table(names: Iterable[str]) -> frozenset:
    """Build a case-insensitive lookup table from primitive type spellings."""
    return frozenset(name.lower() for name in names)


def is_primitive_type(type_name: Optional[str], primitive_types: AbstractSet[str]) -> bool:
    """Determine whether a written type name denotes a primitive type.

    Args:
        type_name: The type as written in source, or None when absent.
        primitive_types: Lower-cased primitive spellings of the active grammar.

    Returns:
        True only for an exact, case-insensitive match against the table.
        Generic, array, nullable and qualified names are never primitive.
    """
    if type_name is None:
        return False
    return type_name.lower() in primitive_types
