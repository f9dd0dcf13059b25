from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
from uuid import uuid4

from unigraph.graph.graph_errors import UnknownVariant

GraphId = str
NodeId = str
EdgeId = str

AttributeValue = Union[
    None, bool, int, float, str, List["AttributeValue"], Dict[str, "AttributeValue"]
]
Attributes = Dict[str, AttributeValue]
SpatialHint = Tuple[float, float, float]


def new_id() -> str:
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Variant(str, Enum):
    """
    The four graph flavours sharing the unified operation surface.
    """

    CONTEXT = "context"
    CONCEPT = "concept"
    WORKFLOW = "workflow"
    IPLD = "ipld"

    @classmethod
    def parse(cls, value: Union["Variant", str]) -> "Variant":
        if isinstance(value, Variant):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnknownVariant(str(value)) from None


# ---------------------------------------------------------------------
# Attribute bags
# ---------------------------------------------------------------------


def _check_value(value: Any, path: str) -> AttributeValue:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (list, tuple)):
        return [_check_value(v, f"{path}[{i}]") for i, v in enumerate(value)]
    if isinstance(value, dict):
        out: Dict[str, AttributeValue] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise ValueError(f"non-string key {k!r} at {path}")
            out[k] = _check_value(v, f"{path}.{k}")
        return out
    raise ValueError(
        f"unsupported attribute value of type {type(value).__name__} at {path}"
    )


def validate_attributes(attributes: Optional[Dict[str, Any]]) -> Attributes:
    """
    Validate an attribute bag and return a normalised deep copy.

    Raises ValueError describing the first offending key.
    """
    if attributes is None:
        return {}
    if not isinstance(attributes, dict):
        raise ValueError("attributes must be a mapping")
    return _check_value(attributes, "attributes")  # type: ignore[return-value]


def copy_attributes(attributes: Attributes) -> Attributes:
    return copy.deepcopy(attributes)


def validate_spatial_hint(hint: Any) -> Optional[SpatialHint]:
    if hint is None:
        return None
    if isinstance(hint, (str, bytes, dict)):
        raise ValueError("spatial_hint must be a 3-tuple of floats")
    try:
        values = list(hint)
    except TypeError:
        raise ValueError("spatial_hint must be a 3-tuple of floats") from None
    if len(values) != 3:
        raise ValueError("spatial_hint must be a 3-tuple of floats")
    coords = []
    for c in values:
        if isinstance(c, bool) or not isinstance(c, (int, float)):
            raise ValueError("spatial_hint must be a 3-tuple of floats")
        if not math.isfinite(c):
            raise ValueError("spatial_hint coordinates must be finite")
        coords.append(float(c))
    return (coords[0], coords[1], coords[2])


# ---------------------------------------------------------------------
# Element payloads
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class NodeData:
    """
    Payload of a node, everything except its identifier.
    """

    type_tag: str
    spatial_hint: Optional[SpatialHint] = None
    attributes: Attributes = field(default_factory=dict)


@dataclass(frozen=True)
class EdgeData:
    """
    Payload of an edge, everything except identity and endpoints.
    """

    type_tag: str
    attributes: Attributes = field(default_factory=dict)


@dataclass(frozen=True)
class Node:
    """
    Identified node as stored in a graph.
    """

    id: NodeId
    type_tag: str
    spatial_hint: Optional[SpatialHint] = None
    attributes: Attributes = field(default_factory=dict)

    @staticmethod
    def from_data(node_id: NodeId, data: NodeData) -> "Node":
        return Node(
            id=node_id,
            type_tag=data.type_tag,
            spatial_hint=data.spatial_hint,
            attributes=copy_attributes(data.attributes),
        )

    @property
    def data(self) -> NodeData:
        return NodeData(
            type_tag=self.type_tag,
            spatial_hint=self.spatial_hint,
            attributes=copy_attributes(self.attributes),
        )

    def copy(self) -> "Node":
        return Node.from_data(self.id, self.data)


@dataclass(frozen=True)
class Edge:
    """
    Directed, identified relationship between two nodes of one graph.
    """

    id: EdgeId
    source: NodeId
    target: NodeId
    type_tag: str
    attributes: Attributes = field(default_factory=dict)

    @staticmethod
    def from_data(
        edge_id: EdgeId,
        source: NodeId,
        target: NodeId,
        data: EdgeData,
    ) -> "Edge":
        return Edge(
            id=edge_id,
            source=source,
            target=target,
            type_tag=data.type_tag,
            attributes=copy_attributes(data.attributes),
        )

    @property
    def data(self) -> EdgeData:
        return EdgeData(
            type_tag=self.type_tag,
            attributes=copy_attributes(self.attributes),
        )

    def copy(self) -> "Edge":
        return Edge.from_data(self.id, self.source, self.target, self.data)


@dataclass(frozen=True)
class GraphMetadata:
    """
    Graph-level descriptive data.

    graph_id and variant_tag never change for a given graph instance.
    """

    graph_id: GraphId
    variant_tag: Variant
    display_name: str
    created_at: datetime = field(default_factory=utc_now)
    attributes: Attributes = field(default_factory=dict)
