"""
Graph algorithms over a GraphStore.

Every function here reads a store and never mutates it:

Query (query.py):
    - query_nodes(): filter by kind, category, complexity, search term

Pathfinding (pathfinding.py):
    - shortest_path(): Dijkstra where each edge costs 11 - strength

Analysis (analysis.py):
    - degree_centrality, find_clusters, find_critical_path
    - build_dependency_map / build_dependent_map (extends, uses, constrains)
    - find_isolated_nodes, find_cycles, has_cycle, topological_sort
    - analyze_graph(): all of the above in one GraphAnalysis

Export (export.py):
    - export_graph(): json, dot or cytoscape
    - from_json(): rebuild a store from a json export
"""

from typegraph.core.graph.analysis import analyze_graph, find_cycles
from typegraph.core.graph.export import ExportFormat, export_graph, from_json
from typegraph.core.graph.models import GraphAnalysis, NodeQuery, PathResult
from typegraph.core.graph.pathfinding import shortest_path
from typegraph.core.graph.query import query_nodes

__all__ = [
    "ExportFormat",
    "GraphAnalysis",
    "NodeQuery",
    "PathResult",
    "analyze_graph",
    "export_graph",
    "find_cycles",
    "from_json",
    "query_nodes",
    "shortest_path",
]
