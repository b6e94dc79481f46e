"""Graph analysis: centrality, clusters, critical path, dependencies, cycles."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from typegraph.core.graph.models import GraphAnalysis
from typegraph.core.models import STRUCTURAL_RELATIONSHIPS

if TYPE_CHECKING:
    from typegraph.core.store import GraphStore

logger = logging.getLogger(__name__)

# Longest-path search on cyclic graphs is exponential. Graphs above this
# size get no critical path; smaller ones stop after a fixed number of
# DFS expansions and keep the best path found.
CRITICAL_PATH_MAX_NODES = 64
CRITICAL_PATH_MAX_EXPANSIONS = 100_000

DEFAULT_MAX_CYCLES = 10


def degree_centrality(store: GraphStore) -> dict[str, float]:
    """(in-degree + out-degree) / max(n - 1, 1) per node. O(V)."""
    denominator = max(store.num_nodes - 1, 1)
    return {
        nid: (store.in_degree(nid) + store.out_degree(nid)) / denominator for nid in store.nodes
    }


def graph_complexity(store: GraphStore) -> float:
    """Mean node complexity plus edges per node; 0.0 for an empty graph."""
    if not store.num_nodes:
        return 0.0
    total = sum(node.complexity for node in store.nodes.values())
    return total / store.num_nodes + store.num_edges / store.num_nodes


def find_clusters(store: GraphStore) -> list[list[str]]:
    """Connected components with edges taken as undirected, singletons dropped."""
    visited: set[str] = set()
    clusters: list[list[str]] = []

    for nid in store.nodes:
        if nid in visited:
            continue
        cluster: list[str] = []
        stack = [nid]
        visited.add(nid)
        while stack:
            node_id = stack.pop()
            cluster.append(node_id)
            for neighbour in reversed(store.get_connected_nodes(node_id)):
                if neighbour.id not in visited:
                    visited.add(neighbour.id)
                    stack.append(neighbour.id)
        if len(cluster) > 1:
            clusters.append(cluster)

    return clusters


def find_isolated_nodes(store: GraphStore) -> list[str]:
    """Nodes with no incident edges. O(V)."""
    return [nid for nid in store.nodes if not store.in_degree(nid) and not store.out_degree(nid)]


def build_dependency_map(store: GraphStore) -> dict[str, list[str]]:
    """Per node, sources of incoming extends/uses/constrains edges."""
    return {
        nid: list(
            dict.fromkeys(
                e.source for e in store.in_edges(nid) if e.relationship in STRUCTURAL_RELATIONSHIPS
            )
        )
        for nid in store.nodes
    }


def build_dependent_map(store: GraphStore) -> dict[str, list[str]]:
    """Per node, targets of outgoing extends/uses/constrains edges."""
    return {
        nid: list(
            dict.fromkeys(
                e.target for e in store.out_edges(nid) if e.relationship in STRUCTURAL_RELATIONSHIPS
            )
        )
        for nid in store.nodes
    }


def has_cycle(store: GraphStore) -> bool:
    """Check for cycles using three-color DFS. O(V + E)."""
    white, gray, black = 0, 1, 2
    color: dict[str, int] = {v: white for v in store.nodes}

    def dfs(node_id: str) -> bool:
        color[node_id] = gray
        for edge in store.out_edges(node_id):
            if edge.target in color:
                if color[edge.target] == gray:
                    return True
                if color[edge.target] == white and dfs(edge.target):
                    return True
        color[node_id] = black
        return False

    return any(color[nid] == white and dfs(nid) for nid in store.nodes)


def find_cycles(store: GraphStore, max_cycles: int = DEFAULT_MAX_CYCLES) -> list[list[str]]:
    """Find cycles with a DFS that keeps an explicit recursion stack.

    Runs once per unvisited root. Each back edge to a node still on the
    stack yields the stack slice from that node as one cycle.
    """
    cycles: list[list[str]] = []
    visited: set[str] = set()
    stack: list[str] = []
    stack_set: set[str] = set()

    def dfs(node_id: str) -> None:
        if len(cycles) >= max_cycles:
            return

        visited.add(node_id)
        stack.append(node_id)
        stack_set.add(node_id)

        for edge in store.out_edges(node_id):
            if edge.target not in store:
                continue
            if edge.target not in visited:
                dfs(edge.target)
            elif edge.target in stack_set and len(cycles) < max_cycles:
                idx = stack.index(edge.target)
                cycles.append(stack[idx:])

        stack.pop()
        stack_set.remove(node_id)

    for nid in store.nodes:
        if nid not in visited:
            dfs(nid)

    return cycles


def topological_sort(store: GraphStore) -> list[str] | None:
    """Topological sort using Kahn's algorithm. O(V + E).

    Returns None if graph has cycles.
    """
    in_degree = {
        nid: sum(1 for e in store.in_edges(nid) if e.source in store) for nid in store.nodes
    }
    queue: deque[str] = deque(nid for nid, d in in_degree.items() if d == 0)
    result: list[str] = []

    while queue:
        node_id = queue.popleft()
        result.append(node_id)

        for edge in store.out_edges(node_id):
            if edge.target in in_degree:
                in_degree[edge.target] -= 1
                if in_degree[edge.target] == 0:
                    queue.append(edge.target)

    return result if len(result) == store.num_nodes else None


def find_critical_path(
    store: GraphStore,
    max_nodes: int = CRITICAL_PATH_MAX_NODES,
    max_expansions: int = CRITICAL_PATH_MAX_EXPANSIONS,
) -> list[str]:
    """Longest simple path by node count.

    Acyclic graphs are solved exactly in O(V + E) over a topological order.
    Cyclic graphs fall back to a backtracking DFS from every node, which is
    exponential: it is only attempted up to max_nodes nodes and stops after
    max_expansions node visits, returning the longest path seen so far.
    """
    order = topological_sort(store)
    if order is not None:
        return _longest_path_acyclic(store, order)

    if store.num_nodes > max_nodes:
        logger.warning(
            "Skipping critical path: cyclic graph has %d nodes (limit %d)",
            store.num_nodes,
            max_nodes,
        )
        return []

    best: list[str] = []
    path: list[str] = []
    on_path: set[str] = set()
    expansions = 0

    def dfs(node_id: str) -> bool:
        """Extend the current path through node_id; False once the budget is spent."""
        nonlocal best, expansions
        expansions += 1
        if expansions > max_expansions:
            return False

        path.append(node_id)
        on_path.add(node_id)
        if len(path) > len(best):
            best = list(path)

        completed = True
        for target in dict.fromkeys(e.target for e in store.out_edges(node_id)):
            # A path through every node cannot be beaten
            if len(best) == store.num_nodes:
                break
            if target in store and target not in on_path and not dfs(target):
                completed = False
                break

        path.pop()
        on_path.discard(node_id)
        return completed

    for nid in store.nodes:
        if len(best) == store.num_nodes:
            break
        if not dfs(nid):
            logger.warning(
                "Critical path search stopped after %d expansions; "
                "returning the longest path found (%d nodes)",
                max_expansions,
                len(best),
            )
            break

    return best


def _longest_path_acyclic(store: GraphStore, order: list[str]) -> list[str]:
    length: dict[str, int] = {}
    successor: dict[str, str | None] = {}

    for nid in reversed(order):
        length[nid], successor[nid] = 1, None
        for edge in store.out_edges(nid):
            if edge.target in length and length[edge.target] + 1 > length[nid]:
                length[nid] = length[edge.target] + 1
                successor[nid] = edge.target

    best: list[str] = []
    for nid in order:
        if not best or length[nid] > len(best):
            path = [nid]
            while (nxt := successor[path[-1]]) is not None:
                path.append(nxt)
            best = path
    return best


def analyze_graph(
    store: GraphStore,
    max_nodes: int = CRITICAL_PATH_MAX_NODES,
    max_cycles: int = DEFAULT_MAX_CYCLES,
    max_expansions: int = CRITICAL_PATH_MAX_EXPANSIONS,
) -> GraphAnalysis:
    """Run every structural metric over the current graph."""
    return GraphAnalysis(
        node_count=store.num_nodes,
        edge_count=store.num_edges,
        complexity=graph_complexity(store),
        centrality=degree_centrality(store),
        clusters=find_clusters(store),
        critical_path=find_critical_path(
            store, max_nodes=max_nodes, max_expansions=max_expansions
        ),
        dependencies=build_dependency_map(store),
        dependents=build_dependent_map(store),
        isolated_nodes=find_isolated_nodes(store),
        circular_dependencies=find_cycles(store, max_cycles=max_cycles),
    )
