"""Data models for graph operations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from typegraph.core.models import enum_value

if TYPE_CHECKING:
    from typegraph.core.models import Category, Relationship, TypeEdge, TypeKind


@dataclass
class NodeQuery:
    """Filter over the node collection.

    Every dimension left as None (or empty) imposes no constraint; the
    others are combined with AND. Either complexity bound may be None
    for an open-ended range.
    """

    kinds: list[TypeKind | str] | None = None
    categories: list[Category | str] | None = None
    complexity_range: tuple[int | None, int | None] | None = None
    search_term: str | None = None
    relationships: list[Relationship | str] | None = None


@dataclass
class PathResult:
    """A weighted path through the graph."""

    path: list[str]
    distance: int
    edges: list[TypeEdge]
    description: str = ""

    def __len__(self) -> int:
        return len(self.path)

    def __iter__(self) -> Iterator[str]:
        return iter(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "distance": self.distance,
            "edges": [e.to_dict() for e in self.edges],
            "description": self.description,
        }

    def __repr__(self) -> str:
        return f"PathResult({' -> '.join(self.path)}, distance={self.distance})"


@dataclass
class GraphAnalysis:
    """Whole-graph structural metrics."""

    node_count: int
    edge_count: int
    complexity: float
    centrality: dict[str, float] = field(default_factory=dict)
    clusters: list[list[str]] = field(default_factory=list)
    critical_path: list[str] = field(default_factory=list)
    dependencies: dict[str, list[str]] = field(default_factory=dict)
    dependents: dict[str, list[str]] = field(default_factory=dict)
    isolated_nodes: list[str] = field(default_factory=list)
    circular_dependencies: list[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "complexity": self.complexity,
            "centralityScores": dict(self.centrality),
            "clusters": [list(c) for c in self.clusters],
            "criticalPath": list(self.critical_path),
            "dependencies": {k: list(v) for k, v in self.dependencies.items()},
            "dependents": {k: list(v) for k, v in self.dependents.items()},
            "isolatedNodes": list(self.isolated_nodes),
            "circularDependencies": [list(c) for c in self.circular_dependencies],
        }


def describe_edge(edge: TypeEdge, source_name: str, target_name: str) -> str:
    """Render one hop as "A <relationship> B"."""
    return f"{source_name} {enum_value(edge.relationship)} {target_name}"
