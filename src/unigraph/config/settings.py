from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from unigraph.graph.graph_schema import AttributeValue, GraphId


class ConflictResolution(str, Enum):
    """
    Policy applied when two composed graphs contribute the same id.
    """

    KEEP_FIRST = "keep_first"
    KEEP_LAST = "keep_last"
    MERGE = "merge"
    FAIL = "fail"

    @classmethod
    def parse(cls, value: Union["ConflictResolution", str]) -> "ConflictResolution":
        if isinstance(value, ConflictResolution):
            return value
        return cls(str(value).lower())


# ---------------------------------------------------------------------
# Type-directed transformation
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class TransformationOptions:
    """
    Controls how a graph is rewritten into another variant.

    Tags absent from the mappings pass through unchanged. Edge tags use
    edge_type_mappings when it names them, else type_mappings.
    """

    type_mappings: Dict[str, str] = field(default_factory=dict)
    edge_type_mappings: Dict[str, str] = field(default_factory=dict)
    preserve_unmapped_metadata: bool = True
    additional_attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    graph_id: Optional[GraphId] = None
    name: Optional[str] = None

    def map_node_type(self, tag: str) -> str:
        return self.type_mappings.get(tag, tag)

    def map_edge_type(self, tag: str) -> str:
        if tag in self.edge_type_mappings:
            return self.edge_type_mappings[tag]
        return self.type_mappings.get(tag, tag)


# ---------------------------------------------------------------------
# Multi-graph composition
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class CompositionOptions:
    """
    Controls how an ordered sequence of graphs is merged into one.

    id_mappings maps an input GraphId to the prefix prepended to every
    node and edge id that graph contributes.
    """

    conflict_resolution: ConflictResolution = ConflictResolution.FAIL
    id_mappings: Dict[GraphId, str] = field(default_factory=dict)
    validate_edges: bool = True
    graph_id: Optional[GraphId] = None
    name: str = "Composed Graph"

    def prefix_for(self, graph_id: GraphId) -> str:
        return self.id_mappings.get(graph_id, "")


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class UnigraphConfig:
    """
    Defaults the engines fall back to when a call passes no options.

    Constructed explicitly (see unigraph.config.loader) and handed to the
    engines, never read from a global.
    """

    transformation: TransformationOptions = field(default_factory=TransformationOptions)
    composition: CompositionOptions = field(default_factory=CompositionOptions)
