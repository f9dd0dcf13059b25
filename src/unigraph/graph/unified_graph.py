from __future__ import annotations

import copy
import dataclasses
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from unigraph.graph.graph_errors import (
    EdgeAlreadyExists,
    InvalidEdgeData,
    InvalidNodeData,
    NodeAlreadyExists,
    NodeNotFound,
    UnsupportedOperation,
)
from unigraph.graph.graph_query import GraphQueryEngine
from unigraph.graph.graph_schema import (
    AttributeValue,
    Edge,
    EdgeData,
    EdgeId,
    GraphId,
    GraphMetadata,
    Node,
    NodeData,
    NodeId,
    Variant,
    copy_attributes,
    validate_attributes,
    validate_spatial_hint,
)
from unigraph.graph.graph_store import GraphStore
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.variants import IpldStore, WorkflowStore, create_store


class UnifiedGraph:
    """
    Single entry point for every graph operation, whatever the variant.

    The facade owns a variant store and is the only thing allowed to touch
    it. Every value going in or out is copied, so callers can never reach
    into stored state.
    """

    def __init__(self, metadata: GraphMetadata, store: GraphStore) -> None:
        assert store.variant == metadata.variant_tag
        self._metadata = metadata
        self._store = store
        self._query = GraphQueryEngine(store)

    @classmethod
    def create(
        cls,
        graph_id: GraphId,
        variant: Union[Variant, str],
        name: str,
        *,
        attributes: Optional[Dict[str, Any]] = None,
        registry: Optional[GraphRegistry] = None,
    ) -> "UnifiedGraph":
        tag = Variant.parse(variant)
        try:
            attrs = validate_attributes(attributes)
        except ValueError as exc:
            raise InvalidNodeData(f"graph attributes: {exc}") from None

        if registry is not None:
            registry.register(graph_id)

        metadata = GraphMetadata(
            graph_id=graph_id,
            variant_tag=tag,
            display_name=name,
            attributes=attrs,
        )
        return cls(metadata, create_store(tag))

    # ------------------------------------------------------------------
    # Identity & metadata
    # ------------------------------------------------------------------

    @property
    def graph_id(self) -> GraphId:
        return self._metadata.graph_id

    @property
    def variant(self) -> Variant:
        return self._metadata.variant_tag

    @property
    def name(self) -> str:
        return self._metadata.display_name

    @property
    def edge_semantics(self) -> str:
        """How rules read this variant's edges, e.g. "dependency" for workflows."""
        return self._store.edge_semantics

    @property
    def metadata(self) -> GraphMetadata:
        return dataclasses.replace(
            self._metadata,
            attributes=copy_attributes(self._metadata.attributes),
        )

    def update_metadata(
        self,
        *,
        display_name: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Replace the display name and/or attribute bag.

        Graph id and variant cannot be changed; a different variant means a
        new graph produced by transformation.
        """
        changes: Dict[str, Any] = {}
        if display_name is not None:
            changes["display_name"] = display_name
        if attributes is not None:
            try:
                changes["attributes"] = validate_attributes(attributes)
            except ValueError as exc:
                raise InvalidNodeData(f"graph attributes: {exc}") from None
        if changes:
            self._metadata = dataclasses.replace(self._metadata, **changes)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, node_id: NodeId, data: NodeData) -> None:
        if self._store.has_node(node_id):
            raise NodeAlreadyExists(node_id)
        if not isinstance(node_id, str) or not node_id:
            raise InvalidNodeData("node id must be a non-empty string")
        if not data.type_tag:
            raise InvalidNodeData("type_tag must not be empty")
        try:
            hint = validate_spatial_hint(data.spatial_hint)
            attrs = validate_attributes(data.attributes)
        except ValueError as exc:
            raise InvalidNodeData(str(exc)) from None

        self._store.add_node(
            Node(id=node_id, type_tag=data.type_tag, spatial_hint=hint, attributes=attrs)
        )

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        node = self._store.get_node(node_id)
        return node.copy() if node is not None else None

    def has_node(self, node_id: NodeId) -> bool:
        return self._store.has_node(node_id)

    def list_nodes(self) -> List[NodeId]:
        return self._store.node_ids()

    def remove_node(self, node_id: NodeId) -> None:
        self._store.remove_node(node_id)

    def nodes(self) -> Iterator[Node]:
        for node in self._store.get_nodes():
            yield node.copy()

    def node_count(self) -> int:
        return self._store.node_count()

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(
        self,
        edge_id: EdgeId,
        source: NodeId,
        target: NodeId,
        data: EdgeData,
    ) -> None:
        if self._store.has_edge(edge_id):
            raise EdgeAlreadyExists(edge_id)
        for endpoint in (source, target):
            if not self._store.has_node(endpoint):
                raise NodeNotFound(endpoint)
        if not isinstance(edge_id, str) or not edge_id:
            raise InvalidEdgeData("edge id must be a non-empty string")
        if not data.type_tag:
            raise InvalidEdgeData("type_tag must not be empty")
        try:
            attrs = validate_attributes(data.attributes)
        except ValueError as exc:
            raise InvalidEdgeData(str(exc)) from None

        self._store.add_edge(
            Edge(
                id=edge_id,
                source=source,
                target=target,
                type_tag=data.type_tag,
                attributes=attrs,
            )
        )

    def get_edge(self, edge_id: EdgeId) -> Optional[Tuple[NodeId, NodeId, EdgeData]]:
        edge = self._store.get_edge(edge_id)
        if edge is None:
            return None
        return edge.source, edge.target, edge.data

    def has_edge(self, edge_id: EdgeId) -> bool:
        return self._store.has_edge(edge_id)

    def list_edges(self) -> List[EdgeId]:
        return self._store.edge_ids()

    def remove_edge(self, edge_id: EdgeId) -> None:
        self._store.remove_edge(edge_id)

    def edges(self) -> Iterator[Edge]:
        for edge in self._store.get_edges():
            yield edge.copy()

    def edge_count(self) -> int:
        return self._store.edge_count()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_nodes_by_type(self, type_tag: str) -> List[NodeId]:
        return list(self._store.nodes_with_type(type_tag))

    def find_edges_by_type(self, type_tag: str) -> List[EdgeId]:
        return list(self._store.edges_with_type(type_tag))

    def get_node_edges(self, node_id: NodeId) -> List[EdgeId]:
        return self._store.incident_edges(node_id)

    def find_path(self, start: NodeId, goal: NodeId) -> Optional[List[NodeId]]:
        return self._query.find_path(start, goal)

    # ------------------------------------------------------------------
    # Variant-specific reads
    # ------------------------------------------------------------------

    def dependencies_of(self, node_id: NodeId) -> List[NodeId]:
        if not isinstance(self._store, WorkflowStore):
            raise UnsupportedOperation("dependencies_of", self.variant.value)
        if not self._store.has_node(node_id):
            raise NodeNotFound(node_id)
        return self._store.dependencies(node_id)

    def content_id_of(self, node_id: NodeId) -> Optional[AttributeValue]:
        if not isinstance(self._store, IpldStore):
            raise UnsupportedOperation("content_id_of", self.variant.value)
        if not self._store.has_node(node_id):
            raise NodeNotFound(node_id)
        return copy.deepcopy(self._store.content_id(node_id))

    def __repr__(self) -> str:
        return (
            f"UnifiedGraph(id={self.graph_id!r}, variant={self.variant.value!r}, "
            f"nodes={self.node_count()}, edges={self.edge_count()})"
        )
