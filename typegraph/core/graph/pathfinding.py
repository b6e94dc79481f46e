"""Weighted shortest path: Dijkstra over relationship strength."""

from __future__ import annotations

import heapq
import itertools
from typing import TYPE_CHECKING

from typegraph.core.graph.models import PathResult, describe_edge

if TYPE_CHECKING:
    from typegraph.core.models import TypeEdge
    from typegraph.core.store import GraphStore

PATH_SEPARATOR = " → "


def shortest_path(store: GraphStore, source_id: str, target_id: str) -> PathResult | None:
    """Find the cheapest directed path. O((V + E) log V).

    Each edge costs 11 - strength. Ties keep the first path discovered:
    edges are relaxed in insertion order and a label only changes on a
    strictly shorter distance.
    """
    if source_id not in store or target_id not in store:
        return None
    if source_id == target_id:
        return PathResult(path=[source_id], distance=0, edges=[])

    counter = itertools.count()
    distances: dict[str, int] = {source_id: 0}
    parent: dict[str, TypeEdge] = {}
    settled: set[str] = set()
    heap: list[tuple[int, int, str]] = [(0, next(counter), source_id)]

    while heap:
        distance, _, current = heapq.heappop(heap)
        if current in settled:
            continue
        settled.add(current)
        if current == target_id:
            return _reconstruct(store, source_id, target_id, distance, parent)

        for edge in store.out_edges(current):
            neighbour = edge.target
            if neighbour in settled or neighbour not in store:
                continue
            alt = distance + edge.cost
            if alt < distances.get(neighbour, alt + 1):
                distances[neighbour] = alt
                parent[neighbour] = edge
                heapq.heappush(heap, (alt, next(counter), neighbour))

    return None


def describe_path(store: GraphStore, edges: list[TypeEdge]) -> str:
    """Human-readable "A uses B → B extends C" rendering of a path."""
    parts = []
    for edge in edges:
        source = store.get_node(edge.source)
        target = store.get_node(edge.target)
        if source and target:
            parts.append(describe_edge(edge, source.name, target.name))
    return PATH_SEPARATOR.join(parts)


def _reconstruct(
    store: GraphStore,
    source_id: str,
    target_id: str,
    distance: int,
    parent: dict[str, TypeEdge],
) -> PathResult:
    """Rebuild the path from the edge each node was reached by."""
    path = [target_id]
    edges: list[TypeEdge] = []
    current = target_id

    while current != source_id:
        edge = parent[current]
        edges.append(edge)
        current = edge.source
        path.append(current)

    path.reverse()
    edges.reverse()
    return PathResult(
        path=path,
        distance=distance,
        edges=edges,
        description=describe_path(store, edges),
    )
