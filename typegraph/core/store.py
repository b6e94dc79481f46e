"""GraphStore: the directed multigraph of type concepts."""

from __future__ import annotations

import copy
import logging
import uuid
from collections.abc import Mapping
from dataclasses import fields, replace
from types import MappingProxyType
from typing import Any, Literal

from typegraph.core.exceptions import MissingEndpointError
from typegraph.core.models import (
    DEFAULT_STRENGTH,
    Category,
    GraphMetadata,
    MetadataValue,
    Relationship,
    TypeEdge,
    TypeKind,
    TypeNode,
    clamp_complexity,
    clamp_strength,
)

logger = logging.getLogger(__name__)

Direction = Literal["in", "out", "both"]

DEFAULT_NAME = "TypeScript Type System"
DEFAULT_DESCRIPTION = "Interactive TypeScript type system graph"
DEFAULT_TAGS = ("typescript", "types", "learning")

_NODE_FIELDS = frozenset(f.name for f in fields(TypeNode))
_EDGE_UPDATABLE = frozenset({"relationship", "strength", "description", "examples", "metadata"})


def generate_id(prefix: str) -> str:
    """Collision-resistant id for a node or edge."""
    return f"{prefix}_{uuid.uuid4().hex}"


class GraphStore:
    """Directed, weighted, attributed multigraph.

    Edges are indexed per endpoint by edge id, so parallel edges between the
    same pair are all kept. Every edge's endpoints exist in the node map,
    except for stores produced by the lenient JSON importer.
    """

    __slots__ = ("_nodes", "_edges", "_out", "_in", "_metadata")

    def __init__(
        self,
        name: str = DEFAULT_NAME,
        description: str = DEFAULT_DESCRIPTION,
        version: str = "1.0.0",
        tags: list[str] | None = None,
    ) -> None:
        self._nodes: dict[str, TypeNode] = {}
        self._edges: dict[str, TypeEdge] = {}
        self._out: dict[str, dict[str, TypeEdge]] = {}
        self._in: dict[str, dict[str, TypeEdge]] = {}
        self._metadata = GraphMetadata(
            name=name,
            description=description,
            version=version,
            tags=list(tags) if tags is not None else list(DEFAULT_TAGS),
        )

    @classmethod
    def with_builtin_catalogue(cls, name: str = DEFAULT_NAME) -> GraphStore:
        """Create a store seeded with the built-in TypeScript concepts."""
        from typegraph.core.catalogue import seed_builtin_catalogue

        store = cls(name=name)
        seed_builtin_catalogue(store)
        return store

    # Nodes

    def add_node(
        self,
        name: str,
        kind: TypeKind | str,
        category: Category | str,
        description: str = "",
        complexity: int = 1,
        examples: list[str] | None = None,
        documentation: str | None = None,
        source_code: str | None = None,
        dependencies: list[str] | None = None,
        metadata: dict[str, MetadataValue] | None = None,
        id: str | None = None,
    ) -> TypeNode:
        """Add a node, or overwrite the node with the same id."""
        node = TypeNode(
            id=id or generate_id("node"),
            name=name,
            kind=TypeKind(kind),
            category=Category(category),
            description=description,
            complexity=clamp_complexity(complexity),
            examples=list(examples or []),
            documentation=documentation,
            source_code=source_code,
            dependencies=list(dependencies or []),
            metadata=dict(metadata or {}),
        )
        self._nodes[node.id] = node
        self._out.setdefault(node.id, {})
        self._in.setdefault(node.id, {})
        self._metadata.touch()
        logger.debug("Added node %s", node.id)
        return node

    def remove_node(self, node_id: str) -> bool:
        """Remove a node and every edge touching it."""
        if node_id not in self._nodes:
            return False

        incident = {**self._out.get(node_id, {}), **self._in.get(node_id, {})}
        for edge in incident.values():
            self._unindex_edge(edge)

        del self._nodes[node_id]
        self._out.pop(node_id, None)
        self._in.pop(node_id, None)
        self._metadata.touch()
        logger.debug("Removed node %s with %d edge(s)", node_id, len(incident))
        return True

    def update_node(self, node_id: str, **updates: Any) -> TypeNode | None:
        """Merge fields into an existing node. The id cannot change."""
        node = self._nodes.get(node_id)
        if node is None:
            return None

        updates.pop("id", None)
        unknown = set(updates) - _NODE_FIELDS
        if unknown:
            raise TypeError(f"Unknown node field(s): {', '.join(sorted(unknown))}")
        if "kind" in updates:
            updates["kind"] = TypeKind(updates["kind"])
        if "category" in updates:
            updates["category"] = Category(updates["category"])
        if "complexity" in updates:
            updates["complexity"] = clamp_complexity(updates["complexity"])

        updated = replace(node, **updates)
        self._nodes[node_id] = updated
        self._metadata.touch()
        return updated

    def get_node(self, node_id: str) -> TypeNode | None:
        return self._nodes.get(node_id)

    # Edges

    def add_edge(
        self,
        source: str,
        target: str,
        relationship: Relationship | str,
        strength: int = DEFAULT_STRENGTH,
        description: str = "",
        examples: list[str] | None = None,
        metadata: dict[str, MetadataValue] | None = None,
        id: str | None = None,
    ) -> TypeEdge:
        """Add a directed edge.

        Raises:
            MissingEndpointError: source or target is not a known node.
                The store is left untouched.
        """
        missing = [n for n in dict.fromkeys((source, target)) if n not in self._nodes]
        if missing:
            raise MissingEndpointError(source, target, missing)

        edge = TypeEdge(
            id=id or generate_id("edge"),
            source=source,
            target=target,
            relationship=Relationship(relationship),
            strength=clamp_strength(strength),
            description=description,
            examples=list(examples or []),
            metadata=dict(metadata or {}),
        )
        old = self._edges.get(edge.id)
        if old is not None:
            self._unindex_edge(old)
        self._index_edge(edge)
        self._metadata.touch()
        logger.debug("Added edge %s: %s -[%s]-> %s", edge.id, source, edge.relationship.value, target)
        return edge

    def remove_edge(self, edge_id: str) -> bool:
        edge = self._edges.get(edge_id)
        if edge is None:
            return False
        self._unindex_edge(edge)
        self._metadata.touch()
        return True

    def update_edge(self, edge_id: str, **updates: Any) -> TypeEdge | None:
        """Merge fields into an existing edge. Endpoints cannot change."""
        edge = self._edges.get(edge_id)
        if edge is None:
            return None

        unknown = set(updates) - _EDGE_UPDATABLE
        if unknown:
            raise TypeError(f"Field(s) not updatable on an edge: {', '.join(sorted(unknown))}")
        if "relationship" in updates:
            updates["relationship"] = Relationship(updates["relationship"])
        if "strength" in updates:
            updates["strength"] = clamp_strength(updates["strength"])

        updated = replace(edge, **updates)
        # Same id and endpoints: overwrites in place, keeping scan order.
        self._index_edge(updated)
        self._metadata.touch()
        return updated

    def get_edge(self, edge_id: str) -> TypeEdge | None:
        return self._edges.get(edge_id)

    def get_edges_between(self, source: str, target: str) -> list[TypeEdge]:
        """All edges from source to target, parallel edges included."""
        return [e for e in self._out.get(source, {}).values() if e.target == target]

    def get_connected_nodes(self, node_id: str, direction: Direction = "both") -> list[TypeNode]:
        """Distinct neighbours one edge away in the given direction."""
        if direction not in ("in", "out", "both"):
            raise ValueError(f"direction must be 'in', 'out' or 'both', got {direction!r}")

        neighbour_ids: dict[str, None] = {}
        if direction != "in":
            for edge in self._out.get(node_id, {}).values():
                neighbour_ids[edge.target] = None
        if direction != "out":
            for edge in self._in.get(node_id, {}).values():
                neighbour_ids[edge.source] = None

        return [self._nodes[nid] for nid in neighbour_ids if nid in self._nodes]

    def out_edges(self, node_id: str) -> list[TypeEdge]:
        """Outgoing edges in insertion order. O(out-degree)."""
        return list(self._out.get(node_id, {}).values())

    def in_edges(self, node_id: str) -> list[TypeEdge]:
        """Incoming edges in insertion order. O(in-degree)."""
        return list(self._in.get(node_id, {}).values())

    def out_degree(self, node_id: str) -> int:
        return len(self._out.get(node_id, {}))

    def in_degree(self, node_id: str) -> int:
        return len(self._in.get(node_id, {}))

    # Graph-level accessors

    @property
    def nodes(self) -> Mapping[str, TypeNode]:
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> Mapping[str, TypeEdge]:
        return MappingProxyType(self._edges)

    def get_nodes(self) -> list[TypeNode]:
        return list(self._nodes.values())

    def get_edges(self) -> list[TypeEdge]:
        return list(self._edges.values())

    @property
    def num_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def metadata(self) -> GraphMetadata:
        """A copy of the graph metadata."""
        return replace(self._metadata, tags=list(self._metadata.tags))

    def set_metadata(self, **updates: Any) -> GraphMetadata:
        """Merge fields into the graph metadata."""
        updates.pop("updated_at", None)
        self._metadata = replace(self._metadata, **updates)
        self._metadata.touch()
        return self.metadata

    def copy(self) -> GraphStore:
        """Independent snapshot of the whole graph."""
        clone = GraphStore.__new__(GraphStore)
        clone._nodes = copy.deepcopy(self._nodes)
        clone._edges = {}
        clone._out = {nid: {} for nid in self._out}
        clone._in = {nid: {} for nid in self._in}
        clone._metadata = self.metadata
        for edge in self._edges.values():
            clone._index_edge(copy.deepcopy(edge))
        return clone

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return (
            f"GraphStore(name={self._metadata.name!r}, "
            f"nodes={self.num_nodes}, edges={self.num_edges})"
        )

    # Index maintenance

    def _index_edge(self, edge: TypeEdge) -> None:
        """Store an edge and link it to both endpoints. No endpoint checks."""
        self._edges[edge.id] = edge
        self._out.setdefault(edge.source, {})[edge.id] = edge
        self._in.setdefault(edge.target, {})[edge.id] = edge

    def _unindex_edge(self, edge: TypeEdge) -> None:
        self._edges.pop(edge.id, None)
        self._out.get(edge.source, {}).pop(edge.id, None)
        self._in.get(edge.target, {}).pop(edge.id, None)
