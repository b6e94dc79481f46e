"""MCP server implementation for typegraph."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from typegraph.core.exceptions import NodeNotFoundError, TypeGraphError
from typegraph.core.graph import NodeQuery, analyze_graph, export_graph, query_nodes, shortest_path
from typegraph.core.graph.query import complexity_bounds
from typegraph.core.loader import load_store
from typegraph.core.models import Category, Relationship, TypeKind
from typegraph.core.store import GraphStore

server = Server("typegraph")


def _get_store(path: Path | None = None) -> GraphStore:
    """Load the configured graph, or the built-in catalogue."""
    return load_store(path)


def _enum_values(enum_cls: Any) -> list[str]:
    return [member.value for member in enum_cls]


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="typegraph_find",
            description=(
                "Search TypeScript type concepts by free text, kind, category, complexity "
                "and incident relationship. "
                "Text matches name, description, documentation and examples."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Case-insensitive search text (optional)",
                    },
                    "kinds": {
                        "type": "array",
                        "items": {"type": "string", "enum": _enum_values(TypeKind)},
                        "description": "Allowed kinds (optional)",
                    },
                    "categories": {
                        "type": "array",
                        "items": {"type": "string", "enum": _enum_values(Category)},
                        "description": "Allowed categories (optional)",
                    },
                    "relationships": {
                        "type": "array",
                        "items": {"type": "string", "enum": _enum_values(Relationship)},
                        "description": "Require an incident edge of one of these kinds (optional)",
                    },
                    "min_complexity": {
                        "type": "integer",
                        "description": "Minimum complexity (optional, inclusive)",
                    },
                    "max_complexity": {
                        "type": "integer",
                        "description": "Maximum complexity (optional, inclusive)",
                    },
                },
            },
        ),
        Tool(
            name="typegraph_neighbors",
            description="List concepts one relationship away from a concept.",
            inputSchema={
                "type": "object",
                "properties": {
                    "node_id": {"type": "string", "description": "Concept id"},
                    "direction": {
                        "type": "string",
                        "enum": ["in", "out", "both"],
                        "default": "both",
                    },
                },
                "required": ["node_id"],
            },
        ),
        Tool(
            name="typegraph_path",
            description=(
                "Find the strongest chain of relationships from one concept to another. "
                "Stronger relationships count as shorter hops."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {"type": "string", "description": "Start concept id"},
                    "target": {"type": "string", "description": "End concept id"},
                },
                "required": ["source", "target"],
            },
        ),
        Tool(
            name="typegraph_analyze",
            description=(
                "Structural analysis: degree centrality, clusters, critical path, "
                "dependency maps (extends/uses/constrains), isolated concepts and cycles."
            ),
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="typegraph_export",
            description="Export the graph as json, dot (Graphviz) or cytoscape.",
            inputSchema={
                "type": "object",
                "properties": {
                    "format": {
                        "type": "string",
                        "enum": ["json", "dot", "cytoscape"],
                        "default": "json",
                    },
                },
            },
        ),
        Tool(
            name="typegraph_stats",
            description="Get graph metadata and size.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        store = _get_store()
        if name == "typegraph_find":
            result = _handle_find(
                store,
                arguments.get("query"),
                arguments.get("kinds"),
                arguments.get("categories"),
                arguments.get("min_complexity"),
                arguments.get("max_complexity"),
                arguments.get("relationships"),
            )
        elif name == "typegraph_neighbors":
            result = _handle_neighbors(
                store, arguments["node_id"], arguments.get("direction", "both")
            )
        elif name == "typegraph_path":
            result = _handle_path(store, arguments["source"], arguments["target"])
        elif name == "typegraph_analyze":
            result = _handle_analyze(store)
        elif name == "typegraph_export":
            result = _handle_export(store, arguments.get("format", "json"))
        elif name == "typegraph_stats":
            result = _handle_stats(store)
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (FileNotFoundError, TypeGraphError, ValueError) as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_find(
    store: GraphStore,
    query: str | None,
    kinds: list[str] | None,
    categories: list[str] | None,
    min_complexity: int | None = None,
    max_complexity: int | None = None,
    relationships: list[str] | None = None,
) -> dict[str, Any]:
    """Handle typegraph_find tool."""
    nodes = query_nodes(
        store,
        NodeQuery(
            kinds=kinds,
            categories=categories,
            complexity_range=complexity_bounds(min_complexity, max_complexity),
            search_term=query,
            relationships=relationships,
        ),
    )
    return {"results": [n.to_dict() for n in nodes]}


def _handle_neighbors(store: GraphStore, node_id: str, direction: str) -> dict[str, Any]:
    """Handle typegraph_neighbors tool."""
    if node_id not in store:
        raise NodeNotFoundError(node_id)
    connected = store.get_connected_nodes(node_id, direction)  # type: ignore[arg-type]
    return {"node_id": node_id, "direction": direction, "results": [n.to_dict() for n in connected]}


def _handle_path(store: GraphStore, source: str, target: str) -> dict[str, Any]:
    """Handle typegraph_path tool."""
    result = shortest_path(store, source, target)
    if result is None:
        return {"error": f"No path from '{source}' to '{target}'", "path": None}
    return result.to_dict()


def _handle_analyze(store: GraphStore) -> dict[str, Any]:
    """Handle typegraph_analyze tool."""
    return analyze_graph(store).to_dict()


def _handle_export(store: GraphStore, fmt: str) -> dict[str, Any]:
    """Handle typegraph_export tool."""
    return {"format": fmt, "content": export_graph(store, fmt)}


def _handle_stats(store: GraphStore) -> dict[str, Any]:
    """Handle typegraph_stats tool."""
    metadata = store.metadata
    return {
        "name": metadata.name,
        "version": metadata.version,
        "nodes": store.num_nodes,
        "edges": store.num_edges,
        "updated_at": metadata.updated_at.isoformat(),
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
