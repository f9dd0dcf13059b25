from __future__ import annotations

import pytest

from unigraph.config.settings import UnigraphConfig
from unigraph.compose.composer import CompositionEngine
from unigraph.graph.graph_schema import EdgeData, NodeData, Variant
from unigraph.graph.unified_graph import UnifiedGraph
from unigraph.transform.transformer import TransformationEngine


def add_chain(graph: UnifiedGraph, *node_ids: str, edge_type: str = "next") -> None:
    for node_id in node_ids:
        graph.add_node(node_id, NodeData(type_tag="step"))
    for source, target in zip(node_ids, node_ids[1:]):
        graph.add_edge(f"{source}-{target}", source, target, EdgeData(type_tag=edge_type))


@pytest.fixture()
def config() -> UnigraphConfig:
    return UnigraphConfig()


@pytest.fixture()
def transformer(config: UnigraphConfig) -> TransformationEngine:
    return TransformationEngine(config=config)


@pytest.fixture()
def composer(config: UnigraphConfig) -> CompositionEngine:
    return CompositionEngine(config=config)


@pytest.fixture()
def context_graph() -> UnifiedGraph:
    return UnifiedGraph.create("g-context", Variant.CONTEXT, "context graph")


@pytest.fixture()
def chain_graph() -> UnifiedGraph:
    graph = UnifiedGraph.create("g-chain", Variant.WORKFLOW, "chain")
    add_chain(graph, "A", "B", "C")
    return graph


@pytest.fixture()
def make_chain():
    return add_chain
