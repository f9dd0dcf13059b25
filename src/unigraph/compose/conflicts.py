from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from unigraph.config.settings import ConflictResolution
from unigraph.graph.graph_schema import (
    Edge,
    GraphId,
    Node,
    SpatialHint,
    copy_attributes,
)


@dataclass(frozen=True)
class NodeConflict:
    """
    Two input graphs contribute the same (remapped) node id.
    """

    element_id: str
    first_graph: GraphId
    incoming_graph: GraphId

    kind = "node"


@dataclass(frozen=True)
class EdgeConflict:
    """
    Two input graphs contribute the same (remapped) edge id.
    """

    element_id: str
    first_graph: GraphId
    incoming_graph: GraphId

    kind = "edge"


# ---------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------


def merge_spatial_hints(
    existing: Optional[SpatialHint],
    incoming: Optional[SpatialHint],
) -> Optional[SpatialHint]:
    if existing is None:
        return incoming
    if incoming is None:
        return existing
    mean = np.mean(np.array([existing, incoming], dtype=float), axis=0)
    return (float(mean[0]), float(mean[1]), float(mean[2]))


def resolve_node(existing: Node, incoming: Node, policy: ConflictResolution) -> Node:
    """
    Resolve a node collision under a non-failing policy.
    """
    if policy is ConflictResolution.KEEP_FIRST:
        return existing
    if policy is ConflictResolution.KEEP_LAST:
        return incoming
    if policy is ConflictResolution.MERGE:
        attributes = copy_attributes(existing.attributes)
        attributes.update(copy_attributes(incoming.attributes))
        return Node(
            id=existing.id,
            type_tag=incoming.type_tag,
            spatial_hint=merge_spatial_hints(existing.spatial_hint, incoming.spatial_hint),
            attributes=attributes,
        )
    raise ValueError(f"policy {policy.value} does not resolve conflicts")


def resolve_edge(existing: Edge, incoming: Edge, policy: ConflictResolution) -> Edge:
    if policy is ConflictResolution.KEEP_FIRST:
        return existing
    if policy is ConflictResolution.KEEP_LAST:
        return incoming
    if policy is ConflictResolution.MERGE:
        attributes = copy_attributes(existing.attributes)
        attributes.update(copy_attributes(incoming.attributes))
        return Edge(
            id=existing.id,
            source=incoming.source,
            target=incoming.target,
            type_tag=incoming.type_tag,
            attributes=attributes,
        )
    raise ValueError(f"policy {policy.value} does not resolve conflicts")
