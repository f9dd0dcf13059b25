"""
Concrete graph variants.

All four share the GraphStore capability surface. They differ only in how
transformation and composition rules read their attributes:

- context:  general-purpose relations
- concept:  semantic relations placed in a conceptual space
- workflow: edges read as "dependency" ordering (acyclicity is not enforced)
- ipld:     nodes carry an opaque content identifier under "cid"
"""

from __future__ import annotations

from typing import Dict, List, Optional, Type, Union

from unigraph.graph.graph_schema import AttributeValue, NodeId, Variant
from unigraph.graph.graph_store import GraphStore


class ContextStore(GraphStore):
    variant = Variant.CONTEXT
    edge_semantics = "relation"
    node_defaults = {"context_type": "general"}
    edge_defaults = {"relationship_context": "default"}


class ConceptStore(GraphStore):
    variant = Variant.CONCEPT
    edge_semantics = "semantic"
    node_defaults = {"conceptual_coordinates": [0.0, 0.0, 0.0]}
    edge_defaults = {"semantic_strength": 0.5}


class WorkflowStore(GraphStore):
    variant = Variant.WORKFLOW
    edge_semantics = "dependency"
    node_defaults = {"step_type": "process"}
    edge_defaults = {"flow_type": "sequence"}

    def dependencies(self, node_id: NodeId) -> List[NodeId]:
        """
        Steps the given step depends on, in edge insertion order.
        """
        seen: List[NodeId] = []
        for edge_id in self.incident_edges(node_id):
            edge = self._edges[edge_id]
            if edge.target == node_id and edge.source not in seen:
                seen.append(edge.source)
        return seen


class IpldStore(GraphStore):
    variant = Variant.IPLD
    edge_semantics = "link"
    node_defaults = {"cid": None}
    edge_defaults = {"link_type": "reference"}

    content_key = "cid"

    def content_id(self, node_id: NodeId) -> Optional[AttributeValue]:
        # Digest computation and verification happen outside the core.
        node = self.get_node(node_id)
        if node is None:
            return None
        return node.attributes.get(self.content_key)


STORES: Dict[Variant, Type[GraphStore]] = {
    Variant.CONTEXT: ContextStore,
    Variant.CONCEPT: ConceptStore,
    Variant.WORKFLOW: WorkflowStore,
    Variant.IPLD: IpldStore,
}


def store_class(variant: Union[Variant, str]) -> Type[GraphStore]:
    return STORES[Variant.parse(variant)]


def create_store(variant: Union[Variant, str]) -> GraphStore:
    return store_class(variant)()
