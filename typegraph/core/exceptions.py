"""Typegraph custom exceptions."""


class TypeGraphError(Exception):
    """Base exception for typegraph errors."""


class MissingEndpointError(TypeGraphError):
    """Edge source or target is not a node in the graph."""

    def __init__(self, source: str, target: str, missing: list[str]) -> None:
        self.source = source
        self.target = target
        self.missing = missing
        super().__init__(
            f"Cannot add edge {source!r} -> {target!r}: "
            f"missing endpoint(s) {', '.join(repr(m) for m in missing)}"
        )


class NodeNotFoundError(TypeGraphError):
    """Node not found in the graph."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id!r}")


class UnsupportedFormatError(TypeGraphError):
    """Export format is not one of json, dot, cytoscape."""

    def __init__(self, fmt: str) -> None:
        self.format = fmt
        super().__init__(f"Unsupported export format: {fmt!r}")
