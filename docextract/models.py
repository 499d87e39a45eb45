"""
Data models for extracted declarations.

Every record is created fresh for one extraction pass over one source unit.
Serialized keys follow the camelCase contract consumed by the renderer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from docextract.config import SENTINEL_TEMPLATE, DocTag


def undocumented(tag: DocTag) -> str:
    """Return the placeholder text used when ``tag`` is not documented.

    Args:
        tag: The documentation section that was requested.

    Returns:
        The sentinel string, e.g. ``" NO SUMMARY "``.
    """
    return SENTINEL_TEMPLATE.format(tag=tag.value.upper())


def is_undocumented(text: Optional[str]) -> bool:
    """Check whether ``text`` is the placeholder for a missing section."""
    if text is None:
        return True
    return any(text == undocumented(tag) for tag in DocTag)


def _dump_sequence(items: Optional[Sequence["Declaration"]]) -> Optional[List[Dict[str, Any]]]:
    if items is None:
        return None
    return [item.to_dict() for item in items]


class ExtractionError(Exception):
    """Raised when a declaration node cannot be introspected safely."""

    def __init__(
        self,
        message: str,
        unit_id: Optional[str] = None,
        declaration_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.unit_id = unit_id
        self.declaration_name = declaration_name

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert the error to a dictionary for run reports."""
        return {
            "message": self.message,
            "unitId": self.unit_id,
            "declarationName": self.declaration_name,
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.declaration_name:
            parts.append(f"declaration={self.declaration_name}")
        if self.unit_id:
            parts.append(f"unit={self.unit_id}")
        return " | ".join(parts)


@dataclass
class Declaration:
    """A single member record: field, property, method or enum member.

    Attributes:
        name: Identifier text, never empty.
        summary_text: Cleaned summary text, or the summary placeholder.
        type_name: Written type name; None for enum members.
        returns_text: Cleaned returns text (methods only).
        is_primitive_type: Derived from ``type_name`` by the grammar's classifier.
        parameters: Written parameter signatures (methods with parameters only).
    """

    name: str
    summary_text: str
    type_name: Optional[str] = None
    returns_text: Optional[str] = None
    is_primitive_type: bool = False
    parameters: Optional[List[str]] = None

    def attach_parameters(self, parameters: Sequence[str]) -> None:
        """Attach the parameter list; an empty list leaves it absent."""
        if parameters:
            self.parameters = list(parameters)

    @property
    def has_summary(self) -> bool:
        return not is_undocumented(self.summary_text)

    @property
    def has_returns(self) -> bool:
        return self.returns_text is not None and not is_undocumented(self.returns_text)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the declaration to a dictionary suitable for JSON serialization."""
        return {
            "name": self.name,
            "summaryText": self.summary_text,
            "typeName": self.type_name,
            "returnsText": self.returns_text,
            "isPrimitiveType": self.is_primitive_type,
            "parameters": list(self.parameters) if self.parameters is not None else None,
        }


@dataclass
class TypeDeclaration:
    """Shared shape of class, interface and struct records.

    A member sequence is None when the type declares no member of that kind,
    which is distinct from an empty list.
    """

    name: str
    summary_text: str
    properties: Optional[List[Declaration]] = None
    fields: Optional[List[Declaration]] = None
    methods: Optional[List[Declaration]] = None

    @property
    def has_summary(self) -> bool:
        return not is_undocumented(self.summary_text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "summaryText": self.summary_text,
            "properties": _dump_sequence(self.properties),
            "fields": _dump_sequence(self.fields),
            "methods": _dump_sequence(self.methods),
        }


@dataclass
class ClassDeclaration(TypeDeclaration):
    """A class record; ``base_types`` is empty when no base list is declared."""

    base_types: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["baseTypes"] = list(self.base_types)
        return payload


@dataclass
class InterfaceDeclaration(TypeDeclaration):
    """An interface record (fields are never collected)."""


@dataclass
class StructDeclaration(TypeDeclaration):
    """A struct record."""


@dataclass
class EnumDeclaration:
    """An enum record with its members in source order."""

    name: str
    summary_text: str
    members: List[Declaration] = field(default_factory=list)

    @property
    def has_summary(self) -> bool:
        return not is_undocumented(self.summary_text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "summaryText": self.summary_text,
            "members": [member.to_dict() for member in self.members],
        }


@dataclass
class SourceUnitResult:
    """Aggregate output for one parsed source unit.

    Attributes:
        unit_id: Identifier of the source unit (usually a relative file path).
        grammar: Name of the grammar the unit was parsed with.
        classes: Class records in encounter order.
        interfaces: Interface records in encounter order.
        structs: Struct records in encounter order.
        enums: Enum records in encounter order.
        errors: Per-declaration extraction failures; extraction continued past them.
    """

    unit_id: str
    grammar: str
    classes: List[ClassDeclaration] = field(default_factory=list)
    interfaces: List[InterfaceDeclaration] = field(default_factory=list)
    structs: List[StructDeclaration] = field(default_factory=list)
    enums: List[EnumDeclaration] = field(default_factory=list)
    errors: List[ExtractionError] = field(default_factory=list)

    def merge(self, other: "SourceUnitResult") -> None:
        """Append every sequence of ``other`` to this result, preserving order."""
        self.classes.extend(other.classes)
        self.interfaces.extend(other.interfaces)
        self.structs.extend(other.structs)
        self.enums.extend(other.enums)
        self.errors.extend(other.errors)

    @property
    def declaration_count(self) -> int:
        return len(self.classes) + len(self.interfaces) + len(self.structs) + len(self.enums)

    @property
    def is_empty(self) -> bool:
        return self.declaration_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary suitable for JSON serialization."""
        return {
            "unitId": self.unit_id,
            "grammar": self.grammar,
            "classes": [item.to_dict() for item in self.classes],
            "interfaces": [item.to_dict() for item in self.interfaces],
            "structs": [item.to_dict() for item in self.structs],
            "enums": [item.to_dict() for item in self.enums],
            "errors": [error.to_dict() for error in self.errors],
        }
