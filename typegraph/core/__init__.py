"""
Core module: data models, exceptions, and the graph store.

Models (models.py):
    - TypeNode: A type-system concept (string, Partial<T>, ...)
    - TypeEdge: A directed, weighted relationship between two concepts
    - TypeKind/Category/Relationship: Enums for categorization

Exceptions (exceptions.py):
    - TypeGraphError: Base exception for all typegraph errors
    - MissingEndpointError: Edge endpoint is not in the graph
    - NodeNotFoundError: Requested node doesn't exist
    - UnsupportedFormatError: Unknown export format

Store (store.py):
    - GraphStore: In-memory multigraph with cascading deletes
    - Seeded with built-in concepts via GraphStore.with_builtin_catalogue()
"""

from typegraph.core.exceptions import (
    MissingEndpointError,
    NodeNotFoundError,
    TypeGraphError,
    UnsupportedFormatError,
)
from typegraph.core.models import (
    STRUCTURAL_RELATIONSHIPS,
    Category,
    GraphMetadata,
    Relationship,
    TypeEdge,
    TypeKind,
    TypeNode,
)
from typegraph.core.store import GraphStore

__all__ = [
    # Models
    "TypeNode",
    "TypeEdge",
    "GraphMetadata",
    "TypeKind",
    "Category",
    "Relationship",
    "STRUCTURAL_RELATIONSHIPS",
    # Exceptions
    "TypeGraphError",
    "MissingEndpointError",
    "NodeNotFoundError",
    "UnsupportedFormatError",
    # Store
    "GraphStore",
]
