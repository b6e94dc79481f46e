"""
Typegraph: an in-memory graph of TypeScript type-system concepts.

Typegraph models how type concepts relate to each other, enabling you to:
- Query concepts by kind, category, complexity or free text
- Find the strongest chain of relationships between two concepts
- Analyze centrality, clusters, dependencies and cycles
- Export to JSON, Graphviz DOT or Cytoscape.js

Usage:
    from typegraph.core import GraphStore
    from typegraph.core.graph import shortest_path

    store = GraphStore.with_builtin_catalogue()
    result = shortest_path(store, "partial", "unknown")
"""

__version__ = "0.1.0"
