"""
Export/import record for handing graphs to persistence or a host runtime.

The record is a plain snapshot; importing replays it through the facade,
so every structural check applies as if the graph were built by hand.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from unigraph.graph.graph_schema import EdgeData, NodeData, Variant
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.unified_graph import UnifiedGraph


class NodeRecord(BaseModel):
    id: str
    type_tag: str
    position: Optional[Tuple[float, float, float]] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class EdgeRecord(BaseModel):
    id: str
    source: str
    target: str
    type_tag: str
    attributes: Dict[str, Any] = Field(default_factory=dict)


class GraphRecord(BaseModel):
    graph_id: str
    variant_tag: Variant
    name: str
    nodes: List[NodeRecord] = Field(default_factory=list)
    edges: List[EdgeRecord] = Field(default_factory=list)


def export_graph(graph: UnifiedGraph) -> GraphRecord:
    return GraphRecord(
        graph_id=graph.graph_id,
        variant_tag=graph.variant,
        name=graph.name,
        nodes=[
            NodeRecord(
                id=node.id,
                type_tag=node.type_tag,
                position=node.spatial_hint,
                attributes=node.attributes,
            )
            for node in graph.nodes()
        ],
        edges=[
            EdgeRecord(
                id=edge.id,
                source=edge.source,
                target=edge.target,
                type_tag=edge.type_tag,
                attributes=edge.attributes,
            )
            for edge in graph.edges()
        ],
    )


def import_graph(
    record: GraphRecord,
    *,
    registry: Optional[GraphRegistry] = None,
) -> UnifiedGraph:
    graph = UnifiedGraph.create(record.graph_id, record.variant_tag, record.name)

    for node in record.nodes:
        graph.add_node(
            node.id,
            NodeData(
                type_tag=node.type_tag,
                spatial_hint=node.position,
                attributes=node.attributes,
            ),
        )
    for edge in record.edges:
        graph.add_edge(
            edge.id,
            edge.source,
            edge.target,
            EdgeData(type_tag=edge.type_tag, attributes=edge.attributes),
        )

    if registry is not None:
        registry.register(graph.graph_id)
    return graph
