"""
Error hierarchy for unigraph.

Structural errors are always locally recoverable: the call that raised
them left the graph untouched.
"""

from __future__ import annotations


class GraphError(Exception):
    """
    Root of every error raised by unigraph.
    """


class NodeAlreadyExists(GraphError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node already exists: {node_id}")
        self.node_id = node_id


class NodeNotFound(GraphError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class EdgeAlreadyExists(GraphError):
    def __init__(self, edge_id: str) -> None:
        super().__init__(f"Edge already exists: {edge_id}")
        self.edge_id = edge_id


class EdgeNotFound(GraphError):
    def __init__(self, edge_id: str) -> None:
        super().__init__(f"Edge not found: {edge_id}")
        self.edge_id = edge_id


class InvalidNodeData(GraphError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid node data: {reason}")
        self.reason = reason


class InvalidEdgeData(GraphError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid edge data: {reason}")
        self.reason = reason


class DuplicateGraphId(GraphError):
    def __init__(self, graph_id: str) -> None:
        super().__init__(f"Graph id already in use: {graph_id}")
        self.graph_id = graph_id


class UnknownVariant(GraphError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown graph variant: {tag}")
        self.tag = tag


class UnsupportedOperation(GraphError):
    def __init__(self, operation: str, variant: str) -> None:
        super().__init__(f"Operation {operation} not supported by {variant} graphs")
        self.operation = operation
        self.variant = variant


# ---------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------


class TransformationError(GraphError):
    pass


class NotSupported(TransformationError):
    def __init__(self, source_variant: str, target_variant: str) -> None:
        super().__init__(
            f"Transformation not supported from {source_variant} to {target_variant}"
        )
        self.source_variant = source_variant
        self.target_variant = target_variant


# ---------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------


class CompositionError(GraphError):
    pass


class NothingToCompose(CompositionError):
    def __init__(self) -> None:
        super().__init__("Cannot compose zero graphs")


class ConflictDetected(CompositionError):
    def __init__(self, element_id: str, kind: str, graphs: tuple) -> None:
        super().__init__(
            f"{kind.capitalize()} conflict on {element_id} "
            f"between graphs {graphs[0]} and {graphs[1]}"
        )
        self.element_id = element_id
        self.kind = kind
        self.graphs = graphs


class EdgeValidationFailed(CompositionError):
    def __init__(self, edge_id: str, missing: list) -> None:
        super().__init__(
            f"Edge {edge_id} references missing node(s): {', '.join(missing)}"
        )
        self.edge_id = edge_id
        self.missing = missing
