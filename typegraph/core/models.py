"""Data models for typegraph."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

MetadataValue = str | int | float | bool

MIN_COMPLEXITY, MAX_COMPLEXITY = 1, 5
MIN_STRENGTH, MAX_STRENGTH = 1, 10
DEFAULT_STRENGTH = 5


class TypeKind(str, Enum):
    """Kinds of type-system concepts a node can represent."""

    PRIMITIVE = "primitive"
    OBJECT = "object"
    ARRAY = "array"
    FUNCTION = "function"
    GENERIC = "generic"
    UTILITY = "utility"
    INTERFACE = "interface"
    CLASS = "class"
    ENUM = "enum"
    UNION = "union"
    INTERSECTION = "intersection"
    LITERAL = "literal"
    CONDITIONAL = "conditional"


class Category(str, Enum):
    """Where a type concept comes from."""

    BUILT_IN = "built-in"
    USER_DEFINED = "user-defined"
    UTILITY = "utility"
    ADVANCED = "advanced"
    CUSTOM = "custom"


class Relationship(str, Enum):
    """Semantics of a directed edge between two concepts."""

    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    COMPOSES = "composes"
    USES = "uses"
    CONSTRAINS = "constrains"
    TRANSFORMS = "transforms"
    RETURNS = "returns"
    ACCEPTS = "accepts"
    CONTAINS = "contains"


# Relationships that count as dependencies; the rest are compositional.
STRUCTURAL_RELATIONSHIPS = frozenset(
    {Relationship.EXTENDS, Relationship.USES, Relationship.CONSTRAINS}
)


def clamp_complexity(value: int | float) -> int:
    """Clamp a complexity score into [1, 5]."""
    return max(MIN_COMPLEXITY, min(MAX_COMPLEXITY, int(value)))


def clamp_strength(value: int | float) -> int:
    """Clamp an edge strength into [1, 10]."""
    return max(MIN_STRENGTH, min(MAX_STRENGTH, int(value)))


def enum_value(value: Enum | str) -> str:
    """Plain string value of an enum member or an already-raw string."""
    return value.value if isinstance(value, Enum) else value


def _coerce(enum_cls: type[Enum], value: Any) -> Any:
    """Enum member for a known value, the raw value otherwise."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.now()


@dataclass
class TypeNode:
    """A type-system concept (vertex of the graph)."""

    id: str
    name: str
    kind: TypeKind
    category: Category
    description: str = ""
    complexity: int = MIN_COMPLEXITY
    examples: list[str] = field(default_factory=list)
    documentation: str | None = None
    source_code: str | None = None
    # Informational only; not mirrored as edges.
    dependencies: list[str] = field(default_factory=list)
    metadata: dict[str, MetadataValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form using the export key names."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": enum_value(self.kind),
            "category": enum_value(self.category),
            "description": self.description,
            "complexity": self.complexity,
            "examples": list(self.examples),
            "documentation": self.documentation,
            "sourceCode": self.source_code,
            "dependencies": list(self.dependencies),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TypeNode:
        """Create a node from an exported dict without validating it."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            kind=_coerce(TypeKind, data.get("kind", data.get("type", ""))),
            category=_coerce(Category, data.get("category", "")),
            description=data.get("description", ""),
            complexity=data.get("complexity", MIN_COMPLEXITY),
            examples=list(data.get("examples") or []),
            documentation=data.get("documentation"),
            source_code=data.get("sourceCode"),
            dependencies=list(data.get("dependencies") or []),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class TypeEdge:
    """A directed, weighted relationship between two concepts."""

    id: str
    source: str
    target: str
    relationship: Relationship
    strength: int = DEFAULT_STRENGTH
    description: str = ""
    examples: list[str] = field(default_factory=list)
    metadata: dict[str, MetadataValue] = field(default_factory=dict)

    @property
    def cost(self) -> int:
        """Traversal cost: stronger relationships are closer."""
        return MAX_STRENGTH + 1 - self.strength

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "relationship": enum_value(self.relationship),
            "strength": self.strength,
            "description": self.description,
            "examples": list(self.examples),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TypeEdge:
        """Create an edge from an exported dict without validating it."""
        return cls(
            id=data.get("id", ""),
            source=data.get("source", ""),
            target=data.get("target", ""),
            relationship=_coerce(Relationship, data.get("relationship", "")),
            strength=data.get("strength", DEFAULT_STRENGTH),
            description=data.get("description", ""),
            examples=list(data.get("examples") or []),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class GraphMetadata:
    """Descriptive metadata for a whole graph."""

    name: str
    description: str = ""
    version: str = "1.0.0"
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    tags: list[str] = field(default_factory=list)

    def touch(self) -> None:
        """Refresh updated_at."""
        self.updated_at = datetime.now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_name: str = "Imported Graph") -> GraphMetadata:
        return cls(
            name=data.get("name") or default_name,
            description=data.get("description", ""),
            version=data.get("version", "1.0.0"),
            created_at=_parse_datetime(data.get("createdAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
            tags=list(data.get("tags") or []),
        )
