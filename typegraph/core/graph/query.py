"""Node filtering and free-text search."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegraph.core.models import enum_value

if TYPE_CHECKING:
    from typegraph.core.graph.models import NodeQuery
    from typegraph.core.models import TypeNode
    from typegraph.core.store import GraphStore


def query_nodes(store: GraphStore, query: NodeQuery) -> list[TypeNode]:
    """Nodes matching every dimension set on the query. O(V + E)."""
    kinds = {enum_value(k) for k in query.kinds or ()}
    categories = {enum_value(c) for c in query.categories or ()}
    relationships = {enum_value(r) for r in query.relationships or ()}
    term = query.search_term.lower() if query.search_term else None

    results = []
    for node in store.nodes.values():
        if kinds and enum_value(node.kind) not in kinds:
            continue
        if categories and enum_value(node.category) not in categories:
            continue
        if query.complexity_range is not None:
            low, high = query.complexity_range
            if low is not None and node.complexity < low:
                continue
            if high is not None and node.complexity > high:
                continue
        if term and not matches_search(node, term):
            continue
        if relationships and not _has_relationship(store, node.id, relationships):
            continue
        results.append(node)

    return results


def matches_search(node: TypeNode, term: str) -> bool:
    """Case-insensitive substring match on name, description, docs or any example."""
    term = term.lower()
    fields = [node.name, node.description, node.documentation or "", *node.examples]
    return any(term in text.lower() for text in fields)


def _has_relationship(store: GraphStore, node_id: str, relationships: set[str]) -> bool:
    incident = store.out_edges(node_id) + store.in_edges(node_id)
    return any(enum_value(e.relationship) in relationships for e in incident)


def complexity_bounds(
    low: int | None = None, high: int | None = None
) -> tuple[int | None, int | None] | None:
    """Complexity range for a NodeQuery; None when neither bound is set."""
    if low is None and high is None:
        return None
    return (low, high)
