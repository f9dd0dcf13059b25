from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from unigraph.compose.conflicts import (
    EdgeConflict,
    NodeConflict,
    resolve_edge,
    resolve_node,
)
from unigraph.config.loader import load_config
from unigraph.config.settings import (
    CompositionOptions,
    ConflictResolution,
    UnigraphConfig,
)
from unigraph.graph.graph_errors import (
    ConflictDetected,
    EdgeValidationFailed,
    NothingToCompose,
)
from unigraph.graph.graph_schema import (
    Edge,
    EdgeId,
    GraphId,
    Node,
    NodeId,
    Variant,
    new_id,
)
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.unified_graph import UnifiedGraph

Conflict = Union[NodeConflict, EdgeConflict]


def _remapped_nodes(graph: UnifiedGraph, prefix: str) -> Iterator[Node]:
    for node in graph.nodes():
        yield Node(
            id=prefix + node.id,
            type_tag=node.type_tag,
            spatial_hint=node.spatial_hint,
            attributes=node.attributes,
        )


def _remapped_edges(graph: UnifiedGraph, prefix: str) -> Iterator[Edge]:
    for edge in graph.edges():
        yield Edge(
            id=prefix + edge.id,
            source=prefix + edge.source,
            target=prefix + edge.target,
            type_tag=edge.type_tag,
            attributes=edge.attributes,
        )


class CompositionEngine:
    """
    Merges an ordered sequence of graphs into one new graph.

    Steps, in order:
    - remap: each graph's configured prefix is prepended to its ids
    - merge nodes, then edges, resolving collisions per policy
    - validate that every edge still has both endpoints

    Composition is all-or-nothing: the output graph only exists once every
    step succeeded. Inputs are only read.
    """

    def __init__(
        self,
        *,
        config: Optional[UnigraphConfig] = None,
        registry: Optional[GraphRegistry] = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.registry = registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compose(
        self,
        graphs: Sequence[UnifiedGraph],
        target_variant: Union[Variant, str],
        options: Optional[CompositionOptions] = None,
    ) -> UnifiedGraph:
        options = options if options is not None else self.config.composition
        if not graphs:
            raise NothingToCompose()

        target = Variant.parse(target_variant)
        policy = ConflictResolution.parse(options.conflict_resolution)
        logger = logging.getLogger("unigraph.compose")

        # ---------------- Merge nodes ----------------

        nodes: Dict[NodeId, Node] = {}
        node_origin: Dict[NodeId, GraphId] = {}

        for graph in graphs:
            for node in _remapped_nodes(graph, options.prefix_for(graph.graph_id)):
                existing = nodes.get(node.id)
                if existing is None:
                    nodes[node.id] = node
                    node_origin[node.id] = graph.graph_id
                    continue
                if policy is ConflictResolution.FAIL:
                    raise ConflictDetected(
                        node.id, "node", (node_origin[node.id], graph.graph_id)
                    )
                nodes[node.id] = resolve_node(existing, node, policy)

        # ---------------- Merge edges ----------------

        edges: Dict[EdgeId, Edge] = {}
        edge_origin: Dict[EdgeId, GraphId] = {}

        for graph in graphs:
            for edge in _remapped_edges(graph, options.prefix_for(graph.graph_id)):
                existing = edges.get(edge.id)
                if existing is None:
                    edges[edge.id] = edge
                    edge_origin[edge.id] = graph.graph_id
                    continue
                if policy is ConflictResolution.FAIL:
                    raise ConflictDetected(
                        edge.id, "edge", (edge_origin[edge.id], graph.graph_id)
                    )
                edges[edge.id] = resolve_edge(existing, edge, policy)

        # ---------------- Validate ----------------

        kept: List[Edge] = []
        for edge in edges.values():
            missing = [n for n in dict.fromkeys((edge.source, edge.target)) if n not in nodes]
            if not missing:
                kept.append(edge)
            elif options.validate_edges:
                raise EdgeValidationFailed(edge.id, missing)
            else:
                logger.warning(
                    "omitting edge %s with missing endpoint(s) %s", edge.id, missing
                )

        # ---------------- Build ----------------

        output = UnifiedGraph.create(
            options.graph_id or new_id(),
            target,
            options.name,
            attributes={"composed_from": [g.graph_id for g in graphs]},
        )
        for node in nodes.values():
            output.add_node(node.id, node.data)
        for edge in kept:
            output.add_edge(edge.id, edge.source, edge.target, edge.data)

        assert output.node_count() == len(nodes)

        if self.registry is not None:
            self.registry.register(output.graph_id)

        logger.info(
            "composed %d graph(s) into %s (%s, policy=%s): nodes=%d edges=%d",
            len(graphs),
            output.graph_id,
            target.value,
            policy.value,
            output.node_count(),
            output.edge_count(),
        )
        return output

    def preview_conflicts(
        self,
        graphs: Sequence[UnifiedGraph],
        *,
        id_mappings: Optional[Dict[GraphId, str]] = None,
    ) -> List[Tuple[str, Conflict]]:
        """
        Every id collision compose() would meet, nodes first, in detection
        order. Nothing is built or mutated.
        """
        mappings = id_mappings or {}
        conflicts: List[Tuple[str, Conflict]] = []

        seen_nodes: Dict[NodeId, GraphId] = {}
        for graph in graphs:
            prefix = mappings.get(graph.graph_id, "")
            for node_id in graph.list_nodes():
                key = prefix + node_id
                if key in seen_nodes:
                    conflicts.append(
                        (key, NodeConflict(key, seen_nodes[key], graph.graph_id))
                    )
                else:
                    seen_nodes[key] = graph.graph_id

        seen_edges: Dict[EdgeId, GraphId] = {}
        for graph in graphs:
            prefix = mappings.get(graph.graph_id, "")
            for edge_id in graph.list_edges():
                key = prefix + edge_id
                if key in seen_edges:
                    conflicts.append(
                        (key, EdgeConflict(key, seen_edges[key], graph.graph_id))
                    )
                else:
                    seen_edges[key] = graph.graph_id

        return conflicts
