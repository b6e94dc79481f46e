"""
MCP server for typegraph.

Exposes the type-concept graph to LLMs via the Model Context Protocol.

Tools:
    - typegraph_find: Search concepts by text, kind, category, complexity
    - typegraph_neighbors: Concepts one relationship away
    - typegraph_path: Strongest relationship chain between two concepts
    - typegraph_analyze: Centrality, clusters, dependencies, cycles
    - typegraph_export: JSON, Graphviz DOT or Cytoscape.js export
    - typegraph_stats: Graph metadata and size

The graph is the built-in catalogue unless $TYPEGRAPH_GRAPH names a JSON export.

Usage:
    Install: pip install typegraph
    Run: typegraph-mcp
"""

import asyncio

from typegraph.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
