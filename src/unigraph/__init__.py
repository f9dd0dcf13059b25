"""
unigraph
========

One operation surface over four structurally similar graph variants
(context, concept, workflow, content-addressed), plus two engines on top:

- transformation: rewrite a graph into another variant, ids preserved
- composition: merge several graphs into one under an explicit
  conflict policy

Everything is synchronous and in-memory; persistence, rendering and
dispatch belong to the caller.

Public API:
- UnifiedGraph
- TransformationEngine
- CompositionEngine
- GraphRegistry
"""

from unigraph.graph.graph_schema import Node, Edge, NodeData, EdgeData, Variant
from unigraph.graph.unified_graph import UnifiedGraph
from unigraph.graph.registry import GraphRegistry
from unigraph.config.settings import (
    ConflictResolution,
    TransformationOptions,
    CompositionOptions,
)
from unigraph.transform.transformer import TransformationEngine
from unigraph.compose.composer import CompositionEngine

__all__ = [
    "Node",
    "Edge",
    "NodeData",
    "EdgeData",
    "Variant",
    "UnifiedGraph",
    "GraphRegistry",
    "ConflictResolution",
    "TransformationOptions",
    "CompositionOptions",
    "TransformationEngine",
    "CompositionEngine",
]

__version__ = "0.1.0"
