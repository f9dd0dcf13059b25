"""
Graph subsystem for unigraph.

Defines the shared data model, the four variant stores and the
UnifiedGraph facade every other layer goes through.
"""

from unigraph.graph.graph_schema import (
    Node,
    Edge,
    NodeData,
    EdgeData,
    GraphMetadata,
    Variant,
    new_id,
)
from unigraph.graph.graph_store import GraphStore
from unigraph.graph.variants import (
    ContextStore,
    ConceptStore,
    WorkflowStore,
    IpldStore,
    create_store,
)
from unigraph.graph.graph_query import GraphQueryEngine
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.unified_graph import UnifiedGraph

__all__ = [
    "Node",
    "Edge",
    "NodeData",
    "EdgeData",
    "GraphMetadata",
    "Variant",
    "new_id",
    "GraphStore",
    "ContextStore",
    "ConceptStore",
    "WorkflowStore",
    "IpldStore",
    "create_store",
    "GraphQueryEngine",
    "GraphRegistry",
    "UnifiedGraph",
]
