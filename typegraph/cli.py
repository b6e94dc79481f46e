"""CLI entry point for typegraph."""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from typegraph.core.exceptions import NodeNotFoundError, TypeGraphError
from typegraph.core.graph import NodeQuery, analyze_graph, export_graph, query_nodes, shortest_path
from typegraph.core.graph.analysis import CRITICAL_PATH_MAX_NODES
from typegraph.core.graph.export import ExportFormat
from typegraph.core.graph.query import complexity_bounds
from typegraph.core.loader import load_store
from typegraph.core.models import TypeNode, enum_value
from typegraph.core.store import GraphStore

app = typer.Typer(
    name="typegraph",
    help="Explore relationships between TypeScript type concepts.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

_MAX_DESCRIPTION_DISPLAY = 60


def format_node(node: TypeNode) -> str:
    """One-line rich rendering of a node."""
    description = node.description
    if len(description) > _MAX_DESCRIPTION_DISPLAY:
        description = description[: _MAX_DESCRIPTION_DISPLAY - 3] + "..."
    return (
        f"[cyan]{node.name}[/cyan] [dim]({node.id}, {enum_value(node.kind)}, "
        f"{enum_value(node.category)}, complexity {node.complexity})[/] {description}"
    )


def get_store(ctx: typer.Context) -> GraphStore:
    store: GraphStore = ctx.obj
    return store


def require_node(store: GraphStore, node_id: str) -> TypeNode:
    node = store.get_node(node_id)
    if node is None:
        raise NodeNotFoundError(node_id)
    return node


def fail(error: Exception) -> NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    graph: Annotated[
        Path | None,
        typer.Option(
            "--graph",
            "-g",
            help="JSON export to load (default: $TYPEGRAPH_GRAPH or the built-in catalogue)",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Load the graph shared by every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    try:
        ctx.obj = load_store(graph)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        fail(e)


@app.command()
def stats(
    ctx: typer.Context,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show graph metadata and size."""
    store = get_store(ctx)
    metadata = store.metadata

    if output_json:
        print(
            json.dumps(
                {**metadata.to_dict(), "nodes": store.num_nodes, "edges": store.num_edges}
            )
        )
    else:
        console.print(f"[bold]{metadata.name}[/] [dim]v{metadata.version}[/]")
        if metadata.description:
            console.print(f"  {metadata.description}")
        console.print(f"Nodes: {store.num_nodes}")
        console.print(f"Edges: {store.num_edges}")
        console.print(f"Updated: {metadata.updated_at.isoformat(timespec='seconds')}")


@app.command()
def show(
    ctx: typer.Context,
    node_id: Annotated[str, typer.Argument(help="Node id")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show a node with its incoming and outgoing relationships."""
    store = get_store(ctx)
    try:
        node = require_node(store, node_id)
    except NodeNotFoundError as e:
        fail(e)

    if output_json:
        print(
            json.dumps(
                {
                    "node": node.to_dict(),
                    "outgoing": [e.to_dict() for e in store.out_edges(node_id)],
                    "incoming": [e.to_dict() for e in store.in_edges(node_id)],
                }
            )
        )
        return

    console.print(f"\n[bold cyan]{node.name}[/] ({enum_value(node.kind)})")
    console.print(f"  [dim]{node.id} | {enum_value(node.category)} | complexity {node.complexity}[/]")
    if node.description:
        console.print(f"  {node.description}")
    if node.documentation:
        console.print(f"  [dim]{node.documentation}[/]")
    for example in node.examples:
        console.print(f"    [green]{example}[/]")

    outgoing = store.out_edges(node_id)
    incoming = store.in_edges(node_id)
    if outgoing:
        console.print("  [green]Outgoing:[/]")
        for edge in outgoing:
            console.print(
                f"    {enum_value(edge.relationship)} [cyan]{edge.target}[/] "
                f"[dim](strength {edge.strength})[/]"
            )
    if incoming:
        console.print("  [green]Incoming:[/]")
        for edge in incoming:
            console.print(
                f"    [cyan]{edge.source}[/] {enum_value(edge.relationship)} "
                f"[dim](strength {edge.strength})[/]"
            )
    if not outgoing and not incoming:
        console.print("  [dim]No relationships[/]")


@app.command()
def find(
    ctx: typer.Context,
    term: Annotated[str | None, typer.Argument(help="Text to search for")] = None,
    kind: Annotated[
        list[str] | None, typer.Option("--kind", "-k", help="Allowed kinds (repeatable)")
    ] = None,
    category: Annotated[
        list[str] | None, typer.Option("--category", "-c", help="Allowed categories (repeatable)")
    ] = None,
    relationship: Annotated[
        list[str] | None,
        typer.Option("--relationship", "-r", help="Require an incident edge of this kind"),
    ] = None,
    min_complexity: Annotated[
        int | None, typer.Option("--min", help="Minimum complexity")
    ] = None,
    max_complexity: Annotated[
        int | None, typer.Option("--max", help="Maximum complexity")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Search concepts by text, kind, category and complexity."""
    store = get_store(ctx)
    query = NodeQuery(
        kinds=kind,
        categories=category,
        complexity_range=complexity_bounds(min_complexity, max_complexity),
        search_term=term,
        relationships=relationship,
    )
    nodes = query_nodes(store, query)

    if output_json:
        print(json.dumps([n.to_dict() for n in nodes]))
        return

    if not nodes:
        console.print("No matching concepts")
        return
    for node in nodes:
        console.print(format_node(node))


@app.command()
def neighbors(
    ctx: typer.Context,
    node_id: Annotated[str, typer.Argument(help="Node id")],
    direction: Annotated[
        str, typer.Option("--direction", "-d", help="in, out or both")
    ] = "both",
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List concepts one relationship away."""
    store = get_store(ctx)
    try:
        require_node(store, node_id)
        connected = store.get_connected_nodes(node_id, direction)  # type: ignore[arg-type]
    except (NodeNotFoundError, ValueError) as e:
        fail(e)

    if output_json:
        print(json.dumps([n.to_dict() for n in connected]))
        return

    if not connected:
        console.print(f"[dim]No {direction} neighbours for {node_id}[/]")
        return
    for node in connected:
        console.print(format_node(node))


@app.command()
def path(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Start node id")],
    target: Annotated[str, typer.Argument(help="End node id")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Find the strongest chain of relationships between two concepts."""
    store = get_store(ctx)
    result = shortest_path(store, source, target)

    if output_json:
        print(json.dumps(result.to_dict() if result else None))
        return

    if result is None:
        console.print(f"No path from [cyan]{source}[/cyan] to [cyan]{target}[/cyan]")
        return

    console.print(f"[bold]{' → '.join(result.path)}[/] [dim](distance {result.distance})[/]")
    if result.description:
        console.print(f"  {result.description}")


@app.command()
def analyze(
    ctx: typer.Context,
    max_nodes: Annotated[
        int,
        typer.Option("--max-nodes", help="Node ceiling for critical path search on cyclic graphs"),
    ] = CRITICAL_PATH_MAX_NODES,
    top: Annotated[int, typer.Option("--top", "-t", help="Most central nodes to show")] = 5,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show centrality, clusters, critical path, isolated nodes and cycles."""
    store = get_store(ctx)
    analysis = analyze_graph(store, max_nodes=max_nodes)

    if output_json:
        print(json.dumps(analysis.to_dict()))
        return

    console.print(f"Nodes: {analysis.node_count}  Edges: {analysis.edge_count}")
    console.print(f"Complexity: {analysis.complexity:.2f}")

    table = Table(title="Most central")
    table.add_column("Node", style="cyan")
    table.add_column("Centrality", justify="right")
    ranked = sorted(analysis.centrality.items(), key=lambda x: -x[1])
    for node_id, score in ranked[:top]:
        table.add_row(node_id, f"{score:.3f}")
    console.print(table)

    console.print(f"Clusters: {len(analysis.clusters)}")
    for cluster in analysis.clusters:
        console.print(f"  [dim]{len(cluster)} nodes:[/] {', '.join(cluster)}")
    if analysis.critical_path:
        console.print(f"Critical path: {' -> '.join(analysis.critical_path)}")
    if analysis.isolated_nodes:
        console.print(f"Isolated: [yellow]{', '.join(analysis.isolated_nodes)}[/]")
    if analysis.circular_dependencies:
        console.print("[red]Cycles:[/]")
        for cycle in analysis.circular_dependencies:
            console.print(f"  {' -> '.join([*cycle, cycle[0]])}")
    else:
        console.print("[green]No cycles[/]")


@app.command()
def export(
    ctx: typer.Context,
    fmt: Annotated[
        ExportFormat, typer.Option("--format", "-f", help="json, dot or cytoscape")
    ] = ExportFormat.JSON,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to file")] = None,
) -> None:
    """Export the graph."""
    store = get_store(ctx)
    try:
        text = export_graph(store, fmt)
    except TypeGraphError as e:
        fail(e)

    if output:
        output.write_text(text, encoding="utf-8")
        err_console.print(f"[green]Wrote {fmt.value} export to {output}[/green]")
    else:
        print(text)


if __name__ == "__main__":
    app()
