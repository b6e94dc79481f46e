"""Resolve and load the graph a CLI or MCP session works on."""

from __future__ import annotations

import os
from pathlib import Path

from typegraph.core.graph.export import from_json
from typegraph.core.store import GraphStore

GRAPH_ENV_VAR = "TYPEGRAPH_GRAPH"


def get_graph_path(path: Path | None = None) -> Path | None:
    """Explicit path, else $TYPEGRAPH_GRAPH, else None (built-in catalogue)."""
    if path is not None:
        return path
    env = os.environ.get(GRAPH_ENV_VAR)
    return Path(env) if env else None


def load_store(path: Path | None = None) -> GraphStore:
    """Load a JSON export, or the built-in catalogue when no file is configured.

    Raises:
        FileNotFoundError: the configured file does not exist.
    """
    graph_path = get_graph_path(path)
    if graph_path is None:
        return GraphStore.with_builtin_catalogue()
    if not graph_path.exists():
        raise FileNotFoundError(f"No graph file found.\nExpected: {graph_path}")
    return from_json(graph_path.read_text(encoding="utf-8"))
