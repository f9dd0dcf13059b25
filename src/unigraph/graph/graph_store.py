from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

import networkx as nx

from unigraph.graph.graph_errors import (
    EdgeAlreadyExists,
    EdgeNotFound,
    NodeAlreadyExists,
    NodeNotFound,
)
from unigraph.graph.graph_schema import Attributes, Edge, EdgeId, Node, NodeId, Variant


class GraphStore:
    """
    In-memory storage shared by every graph variant.

    Nodes live in a networkx MultiDiGraph keyed by NodeId; edges are keyed
    by EdgeId so parallel edges between the same endpoints stay distinct.
    A separate edge index keeps insertion order for diagnostics.

    Subclasses only declare how downstream rules read their elements.
    """

    variant: Variant
    edge_semantics: str = "relation"
    node_defaults: Attributes = {}
    edge_defaults: Attributes = {}

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._edges: Dict[EdgeId, Edge] = {}

    # -------------------- Nodes --------------------

    def add_node(self, node: Node) -> None:
        if node.id in self._graph:
            raise NodeAlreadyExists(node.id)
        self._graph.add_node(node.id, data=node)

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        if node_id not in self._graph:
            return None
        return self._graph.nodes[node_id]["data"]

    def get_nodes(self) -> List[Node]:
        return [data["data"] for _, data in self._graph.nodes(data=True)]

    def node_ids(self) -> List[NodeId]:
        return list(self._graph.nodes)

    def remove_node(self, node_id: NodeId) -> List[EdgeId]:
        """
        Remove a node and every edge incident to it.

        Returns the ids of the cascaded edges.
        """
        if node_id not in self._graph:
            raise NodeNotFound(node_id)

        cascaded = self.incident_edges(node_id)
        for edge_id in cascaded:
            del self._edges[edge_id]
        self._graph.remove_node(node_id)

        if cascaded:
            logging.getLogger("unigraph.graph").debug(
                "removed node %s with %d incident edge(s)", node_id, len(cascaded)
            )
        return cascaded

    # -------------------- Edges --------------------

    def add_edge(self, edge: Edge) -> None:
        if edge.id in self._edges:
            raise EdgeAlreadyExists(edge.id)
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._graph:
                raise NodeNotFound(endpoint)

        self._graph.add_edge(edge.source, edge.target, key=edge.id, data=edge)
        self._edges[edge.id] = edge

    def has_edge(self, edge_id: EdgeId) -> bool:
        return edge_id in self._edges

    def get_edge(self, edge_id: EdgeId) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def get_edges(self) -> List[Edge]:
        return list(self._edges.values())

    def edge_ids(self) -> List[EdgeId]:
        return list(self._edges)

    def remove_edge(self, edge_id: EdgeId) -> None:
        edge = self._edges.pop(edge_id, None)
        if edge is None:
            raise EdgeNotFound(edge_id)
        self._graph.remove_edge(edge.source, edge.target, key=edge_id)

    def incident_edges(self, node_id: NodeId) -> List[EdgeId]:
        if node_id not in self._graph:
            return []
        keys: Set[EdgeId] = {
            k for _, _, k in self._graph.out_edges(node_id, keys=True)
        }
        keys.update(k for _, _, k in self._graph.in_edges(node_id, keys=True))
        return [edge_id for edge_id in self._edges if edge_id in keys]

    # -------------------- Traversal --------------------

    def successors(self, node_id: NodeId) -> List[NodeId]:
        if node_id not in self._graph:
            return []
        return list(self._graph.successors(node_id))

    def predecessors(self, node_id: NodeId) -> List[NodeId]:
        if node_id not in self._graph:
            return []
        return list(self._graph.predecessors(node_id))

    def undirected_neighbors(self, node_id: NodeId) -> Set[NodeId]:
        neighbors = set(self.successors(node_id))
        neighbors.update(self.predecessors(node_id))
        neighbors.discard(node_id)
        return neighbors

    # -------------------- Analytics --------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return len(self._edges)

    def nodes_with_type(self, type_tag: str) -> Iterable[NodeId]:
        for node in self.get_nodes():
            if node.type_tag == type_tag:
                yield node.id

    def edges_with_type(self, type_tag: str) -> Iterable[EdgeId]:
        for edge in self._edges.values():
            if edge.type_tag == type_tag:
                yield edge.id
