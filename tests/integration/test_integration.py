"""Integration tests for the built-in catalogue, loader, CLI and MCP handlers."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from typegraph.cli import app
from typegraph.core.exceptions import NodeNotFoundError
from typegraph.core.graph import NodeQuery, analyze_graph, export_graph, query_nodes, shortest_path
from typegraph.core.graph.export import from_json
from typegraph.core.loader import GRAPH_ENV_VAR, load_store
from typegraph.core.models import Category, TypeKind
from typegraph.core.store import GraphStore
from typegraph.mcp.server import (
    _handle_analyze,
    _handle_export,
    _handle_find,
    _handle_neighbors,
    _handle_path,
    _handle_stats,
)

runner = CliRunner()


@pytest.fixture
def catalogue() -> GraphStore:
    """A store seeded with the built-in concepts."""
    return GraphStore.with_builtin_catalogue()


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    """A small JSON export on disk: A -> B -> C."""
    store = GraphStore(name="On disk")
    for node_id in ["A", "B", "C"]:
        store.add_node(id=node_id, name=node_id, kind="class", category="user-defined")
    store.add_edge("A", "B", "extends", 9)
    store.add_edge("B", "C", "implements", 9)
    path = tmp_path / "graph.json"
    path.write_text(export_graph(store, "json"), encoding="utf-8")
    return path


class TestCatalogue:
    """Tests for the built-in TypeScript concept catalogue."""

    def test_size(self, catalogue: GraphStore) -> None:
        assert catalogue.num_nodes == 27
        assert catalogue.num_edges == 25

    def test_instances_are_independent(self, catalogue: GraphStore) -> None:
        catalogue.remove_node("object")
        fresh = GraphStore.with_builtin_catalogue()
        assert fresh.get_node("object") is not None
        assert fresh.num_edges == 25

    def test_primitives(self, catalogue: GraphStore) -> None:
        node = catalogue.get_node("string")
        assert node is not None
        assert node.kind is TypeKind.PRIMITIVE
        assert node.category is Category.BUILT_IN
        assert '"hello"' in node.examples

    def test_utility_types(self, catalogue: GraphStore) -> None:
        utilities = query_nodes(catalogue, NodeQuery(kinds=["utility"]))
        assert len(utilities) == 12
        partial = catalogue.get_node("partial")
        assert partial is not None
        assert partial.examples == ["Partial<SomeType>"]
        assert partial.complexity == 3

    def test_simple_built_ins(self, catalogue: GraphStore) -> None:
        query = NodeQuery(categories=["built-in"], complexity_range=(1, 1))
        ids = {n.id for n in query_nodes(catalogue, query)}
        assert ids == {"string", "number", "boolean", "null", "undefined", "void", "any"}

    def test_built_ins_up_to_complexity_two(self, catalogue: GraphStore) -> None:
        query = NodeQuery(categories=["built-in"], complexity_range=(1, 2))
        ids = {n.id for n in query_nodes(catalogue, query)}
        assert {"never", "unknown", "object", "array", "function"} <= ids
        assert all(catalogue.nodes[i].category is Category.BUILT_IN for i in ids)
        assert "generic" not in ids

    def test_path_through_object(self, catalogue: GraphStore) -> None:
        result = shortest_path(catalogue, "partial", "unknown")
        assert result is not None
        assert result.path == ["partial", "object", "unknown"]
        assert result.distance == (11 - 8) + (11 - 3)
        assert result.description == "Partial<T> transforms object → object extends unknown"

    def test_path_never_to_unknown(self, catalogue: GraphStore) -> None:
        result = shortest_path(catalogue, "never", "unknown")
        assert result is not None
        assert result.path == ["never", "any", "unknown"]

    def test_no_path_back_from_unknown(self, catalogue: GraphStore) -> None:
        assert shortest_path(catalogue, "unknown", "string") is None

    def test_analysis(self, catalogue: GraphStore) -> None:
        analysis = analyze_graph(catalogue)
        assert analysis.circular_dependencies == []
        assert len(analysis.critical_path) == 3
        assert set(analysis.isolated_nodes) == {
            "boolean",
            "null",
            "undefined",
            "exclude",
            "extract",
            "nonnullable",
            "returntype",
            "parameters",
            "instancetype",
        }
        assert len(analysis.clusters) == 1
        assert len(analysis.clusters[0]) == 18
        assert set(analysis.dependencies["generic"]) == {
            "array",
            "partial",
            "required",
            "readonly",
            "pick",
            "omit",
            "record",
        }
        # composes/transforms are not dependencies
        assert analysis.dependencies["object"] == ["array", "function"]
        assert max(analysis.centrality, key=analysis.centrality.__getitem__) == "object"

    def test_scenario_add_then_remove(self, catalogue: GraphStore) -> None:
        for node_id in ["A", "B", "C"]:
            catalogue.add_node(id=node_id, name=node_id, kind="object", category="custom")
        catalogue.add_edge("A", "B", "uses", 9)
        catalogue.add_edge("B", "C", "uses", 9)
        result = shortest_path(catalogue, "A", "C")
        assert result is not None
        assert result.path == ["A", "B", "C"]
        assert result.distance == 4

        catalogue.remove_node("B")
        assert catalogue.get_edges_between("A", "B") == []
        assert catalogue.get_edges_between("B", "C") == []
        assert catalogue.get_connected_nodes("A") == []
        assert catalogue.num_edges == 25

    def test_round_trip(self, catalogue: GraphStore) -> None:
        restored = from_json(export_graph(catalogue, "json"))
        assert set(restored.nodes) == set(catalogue.nodes)
        assert set(restored.edges) == set(catalogue.edges)
        assert restored.metadata.name == catalogue.metadata.name
        assert shortest_path(restored, "partial", "unknown") == shortest_path(
            catalogue, "partial", "unknown"
        )

    def test_dot_export(self, catalogue: GraphStore) -> None:
        dot = export_graph(catalogue, "dot")
        assert dot.startswith('digraph "TypeScript Type System" {')
        assert sum(1 for line in dot.splitlines() if " -> " in line) == 25


class TestLoader:
    """Tests for graph source resolution."""

    def test_default_is_catalogue(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(GRAPH_ENV_VAR, raising=False)
        assert load_store().num_nodes == 27

    def test_explicit_path(self, graph_file: Path) -> None:
        store = load_store(graph_file)
        assert store.metadata.name == "On disk"
        assert store.num_edges == 2

    def test_env_var(self, graph_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(GRAPH_ENV_VAR, str(graph_file))
        assert load_store().metadata.name == "On disk"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_store(tmp_path / "missing.json")


class TestCli:
    """Tests for the typer command line."""

    @pytest.fixture(autouse=True)
    def no_env_graph(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(GRAPH_ENV_VAR, raising=False)

    def test_stats_json(self) -> None:
        result = runner.invoke(app, ["stats", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["nodes"] == 27
        assert data["edges"] == 25

    def test_stats_from_file(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["--graph", str(graph_file), "stats"])
        assert result.exit_code == 0
        assert "On disk" in result.stdout

    def test_missing_graph_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--graph", str(tmp_path / "nope.json"), "stats"])
        assert result.exit_code == 1

    def test_show(self) -> None:
        result = runner.invoke(app, ["show", "array", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["node"]["name"] == "Array<T>"
        assert {e["target"] for e in data["outgoing"]} == {"object", "generic"}
        assert data["incoming"] == []

    def test_show_unknown_node(self) -> None:
        result = runner.invoke(app, ["show", "ghost"])
        assert result.exit_code == 1

    def test_find(self) -> None:
        result = runner.invoke(
            app, ["find", "--category", "built-in", "--max", "1", "--json"]
        )
        assert result.exit_code == 0
        ids = {n["id"] for n in json.loads(result.stdout)}
        assert ids == {"string", "number", "boolean", "null", "undefined", "void", "any"}

    def test_find_keeps_unclamped_complexity(self, tmp_path: Path) -> None:
        graph = tmp_path / "graph.json"
        graph.write_text(
            json.dumps({"nodes": [{"id": "deep", "name": "Deep", "complexity": 9}]}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["--graph", str(graph), "find", "--json"])
        assert [n["id"] for n in json.loads(result.stdout)] == ["deep"]

        result = runner.invoke(app, ["--graph", str(graph), "find", "--min", "6", "--json"])
        assert [n["id"] for n in json.loads(result.stdout)] == ["deep"]

        result = runner.invoke(app, ["--graph", str(graph), "find", "--max", "5", "--json"])
        assert json.loads(result.stdout) == []

    def test_find_by_relationship(self) -> None:
        result = runner.invoke(app, ["find", "-r", "composes", "--json"])
        ids = {n["id"] for n in json.loads(result.stdout)}
        assert ids == {"union", "intersection", "string", "number", "object"}

    def test_find_text(self) -> None:
        result = runner.invoke(app, ["find", "union"])
        assert result.exit_code == 0
        assert "Union Types" in result.stdout

    def test_neighbors(self) -> None:
        result = runner.invoke(app, ["neighbors", "object", "-d", "out", "--json"])
        assert result.exit_code == 0
        assert [n["id"] for n in json.loads(result.stdout)] == ["unknown"]

    def test_neighbors_bad_direction(self) -> None:
        result = runner.invoke(app, ["neighbors", "object", "-d", "up"])
        assert result.exit_code == 1

    def test_path(self) -> None:
        result = runner.invoke(app, ["path", "partial", "unknown", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["path"] == ["partial", "object", "unknown"]
        assert data["distance"] == 11
        assert len(data["edges"]) == 2

    def test_no_path(self) -> None:
        result = runner.invoke(app, ["path", "unknown", "string"])
        assert result.exit_code == 0
        assert "No path" in result.stdout

    def test_analyze_json(self) -> None:
        result = runner.invoke(app, ["analyze", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["nodeCount"] == 27
        assert data["circularDependencies"] == []

    def test_analyze_text(self) -> None:
        result = runner.invoke(app, ["analyze"])
        assert result.exit_code == 0
        assert "No cycles" in result.stdout

    def test_export_dot(self) -> None:
        result = runner.invoke(app, ["export", "--format", "dot"])
        assert result.exit_code == 0
        assert result.stdout.startswith('digraph "TypeScript Type System" {')

    def test_export_to_file_round_trips(self, tmp_path: Path) -> None:
        output = tmp_path / "out.json"
        result = runner.invoke(app, ["export", "-f", "json", "-o", str(output)])
        assert result.exit_code == 0
        result = runner.invoke(app, ["--graph", str(output), "stats", "--json"])
        assert json.loads(result.stdout)["edges"] == 25


class TestMcpHandlers:
    """Tests for the MCP tool handlers."""

    def test_find(self, catalogue: GraphStore) -> None:
        result = _handle_find(catalogue, "record", None, None, 1, 5)
        assert [n["id"] for n in result["results"]] == ["record"]

    def test_find_without_complexity_bounds(self) -> None:
        store = from_json(json.dumps({"nodes": [{"id": "deep", "name": "Deep", "complexity": 9}]}))
        assert [n["id"] for n in _handle_find(store, None, None, None)["results"]] == ["deep"]
        assert _handle_find(store, None, None, None, max_complexity=5)["results"] == []

    def test_find_by_relationship(self, catalogue: GraphStore) -> None:
        result = _handle_find(catalogue, None, None, None, relationships=["transforms"])
        ids = {n["id"] for n in result["results"]}
        assert ids == {"partial", "required", "readonly", "pick", "omit", "record", "object"}

    def test_neighbors(self, catalogue: GraphStore) -> None:
        result = _handle_neighbors(catalogue, "generic", "in")
        assert len(result["results"]) == 7

    def test_neighbors_unknown(self, catalogue: GraphStore) -> None:
        with pytest.raises(NodeNotFoundError):
            _handle_neighbors(catalogue, "ghost", "both")

    def test_path(self, catalogue: GraphStore) -> None:
        assert _handle_path(catalogue, "never", "unknown")["path"] == ["never", "any", "unknown"]
        assert _handle_path(catalogue, "unknown", "never")["path"] is None

    def test_analyze(self, catalogue: GraphStore) -> None:
        assert _handle_analyze(catalogue)["edgeCount"] == 25

    def test_export(self, catalogue: GraphStore) -> None:
        result = _handle_export(catalogue, "cytoscape")
        assert len(json.loads(result["content"])["nodes"]) == 27

    def test_stats(self, catalogue: GraphStore) -> None:
        assert _handle_stats(catalogue)["nodes"] == 27
