"""Export to JSON, Graphviz DOT and Cytoscape.js; import from JSON."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from typegraph.core.exceptions import UnsupportedFormatError
from typegraph.core.models import GraphMetadata, TypeEdge, TypeNode, enum_value
from typegraph.core.store import GraphStore

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#6B7280"  # Gray

CATEGORY_COLORS = {
    "built-in": "#3B82F6",  # Blue
    "user-defined": "#10B981",  # Green
    "utility": "#8B5CF6",  # Purple
    "advanced": "#F59E0B",  # Amber
    "custom": "#EF4444",  # Red
}

RELATIONSHIP_COLORS = {
    "extends": "#10B981",  # Green
    "implements": "#3B82F6",  # Blue
    "composes": "#8B5CF6",  # Purple
    "uses": "#F59E0B",  # Amber
    "constrains": "#EF4444",  # Red
    "transforms": "#EC4899",  # Pink
    "returns": "#06B6D4",  # Cyan
    "accepts": "#84CC16",  # Lime
    "contains": "#F97316",  # Orange
}


class ExportFormat(str, Enum):
    """Supported export formats."""

    JSON = "json"
    DOT = "dot"
    CYTOSCAPE = "cytoscape"


def export_graph(store: GraphStore, fmt: ExportFormat | str = ExportFormat.JSON) -> str:
    """Serialize the graph in the requested format.

    Raises:
        UnsupportedFormatError: fmt is not json, dot or cytoscape.
    """
    try:
        fmt = ExportFormat(fmt)
    except ValueError:
        raise UnsupportedFormatError(str(fmt)) from None

    if fmt is ExportFormat.JSON:
        return to_json(store)
    if fmt is ExportFormat.DOT:
        return to_dot(store)
    return to_cytoscape(store)


def to_json(store: GraphStore, indent: int = 2) -> str:
    """Round-trippable {metadata, nodes, edges} document."""
    data = {
        "metadata": store.metadata.to_dict(),
        "nodes": [node.to_dict() for node in store.nodes.values()],
        "edges": [edge.to_dict() for edge in store.edges.values()],
    }
    return json.dumps(data, indent=indent)


def to_dot(store: GraphStore) -> str:
    """Graphviz digraph: boxes colored by category, edges by relationship."""
    lines = [
        f'digraph "{_escape(store.metadata.name)}" {{',
        "  rankdir=TB;",
        '  node [shape=box, style="rounded,filled"];',
        "",
    ]

    for node in store.nodes.values():
        color = node_color(node)
        lines.append(f'  "{_escape(node.id)}" [label="{_escape(node.name)}", fillcolor="{color}"];')

    lines.append("")

    for edge in store.edges.values():
        relationship = enum_value(edge.relationship)
        lines.append(
            f'  "{_escape(edge.source)}" -> "{_escape(edge.target)}" '
            f'[label="{_escape(relationship)}", color="{edge_color(edge)}", '
            f"weight={edge.strength}];"
        )

    lines.append("}")
    return "\n".join(lines)


def to_cytoscape(store: GraphStore, indent: int = 2) -> str:
    """Unstyled Cytoscape.js element list."""
    elements = {
        "nodes": [
            {
                "data": {
                    "id": node.id,
                    "label": node.name,
                    "kind": enum_value(node.kind),
                    "category": enum_value(node.category),
                    "complexity": node.complexity,
                }
            }
            for node in store.nodes.values()
        ],
        "edges": [
            {
                "data": {
                    "id": edge.id,
                    "source": edge.source,
                    "target": edge.target,
                    "relationship": enum_value(edge.relationship),
                    "strength": edge.strength,
                }
            }
            for edge in store.edges.values()
        ],
    }
    return json.dumps(elements, indent=indent)


def from_json(text: str) -> GraphStore:
    """Rebuild a store from a JSON export.

    Fields are not validated: missing ones get defaults and edges whose
    endpoints are absent are kept (with a warning), so the result may not
    satisfy the store's referential integrity.
    """
    data: dict[str, Any] = json.loads(text)
    metadata = GraphMetadata.from_dict(data.get("metadata") or {})

    store = GraphStore(name=metadata.name)
    store._metadata = metadata

    for raw in data.get("nodes") or []:
        node = TypeNode.from_dict(raw)
        store._nodes[node.id] = node
        store._out.setdefault(node.id, {})
        store._in.setdefault(node.id, {})

    for raw in data.get("edges") or []:
        edge = TypeEdge.from_dict(raw)
        if edge.source not in store or edge.target not in store:
            logger.warning(
                "Imported edge %s references missing node(s): %s -> %s",
                edge.id,
                edge.source,
                edge.target,
            )
        if (previous := store._edges.get(edge.id)) is not None:
            store._unindex_edge(previous)
        store._index_edge(edge)

    logger.debug("Imported %d nodes and %d edges", store.num_nodes, store.num_edges)
    return store


def node_color(node: TypeNode) -> str:
    return CATEGORY_COLORS.get(enum_value(node.category), DEFAULT_COLOR)


def edge_color(edge: TypeEdge) -> str:
    return RELATIONSHIP_COLORS.get(enum_value(edge.relationship), DEFAULT_COLOR)


def _escape(text: str) -> str:
    """Escape a string for use inside a DOT double-quoted ID."""
    return str(text).replace("\\", "\\\\").replace('"', '\\"')
