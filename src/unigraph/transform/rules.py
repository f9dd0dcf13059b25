"""
Rule table for type-directed transformation.

A rule converts single elements from one variant to another. Rules are
pure: they copy what they read, never touch a graph, and report every
attribute they drop. Identity (ids, endpoints) is never changed.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, NamedTuple, Tuple, Union

from unigraph.config.settings import TransformationOptions
from unigraph.graph.graph_schema import Attributes, Edge, Node, Variant, copy_attributes
from unigraph.graph.variants import store_class


class RuleOutcome(NamedTuple):
    element: Union[Node, Edge]
    dropped: List[str]


NodeRule = Callable[[Node, TransformationOptions], RuleOutcome]
EdgeRule = Callable[[Edge, TransformationOptions], RuleOutcome]
VariantPair = Tuple[Variant, Variant]


@dataclass(frozen=True)
class TransformationRule:
    node_rule: NodeRule
    edge_rule: EdgeRule


def _reshape(
    attributes: Attributes,
    drops: FrozenSet[str],
    defaults: Attributes,
) -> Tuple[Attributes, List[str]]:
    attrs = copy_attributes(attributes)
    dropped = [key for key in attrs if key in drops]
    for key in dropped:
        del attrs[key]
    for key, value in defaults.items():
        if key not in attrs:
            attrs[key] = copy.deepcopy(value)
    return attrs, dropped


def make_rule(
    target: Variant,
    *,
    node_drops: FrozenSet[str] = frozenset(),
    edge_drops: FrozenSet[str] = frozenset(),
) -> TransformationRule:
    """
    Build a rule that drops the given source-only attributes and seeds
    the target variant's defaults.
    """
    target_store = store_class(target)

    def node_rule(node: Node, options: TransformationOptions) -> RuleOutcome:
        attrs, dropped = _reshape(node.attributes, node_drops, target_store.node_defaults)
        attrs.update(copy_attributes(options.additional_attributes))
        return RuleOutcome(
            Node(
                id=node.id,
                type_tag=options.map_node_type(node.type_tag),
                spatial_hint=node.spatial_hint,
                attributes=attrs,
            ),
            dropped,
        )

    def edge_rule(edge: Edge, options: TransformationOptions) -> RuleOutcome:
        attrs, dropped = _reshape(edge.attributes, edge_drops, target_store.edge_defaults)
        return RuleOutcome(
            Edge(
                id=edge.id,
                source=edge.source,
                target=edge.target,
                type_tag=options.map_edge_type(edge.type_tag),
                attributes=attrs,
            ),
            dropped,
        )

    return TransformationRule(node_rule=node_rule, edge_rule=edge_rule)


# Attributes that only mean something in the source variant and have no
# counterpart in the target.
_NODE_DROPS: Dict[VariantPair, FrozenSet[str]] = {
    (Variant.WORKFLOW, Variant.CONCEPT): frozenset({"execution_time"}),
    (Variant.CONCEPT, Variant.WORKFLOW): frozenset({"semantic_embedding"}),
    (Variant.IPLD, Variant.CONTEXT): frozenset({"ipld_codec"}),
    (Variant.IPLD, Variant.CONCEPT): frozenset({"ipld_codec"}),
    (Variant.IPLD, Variant.WORKFLOW): frozenset({"ipld_codec"}),
}


def default_rules() -> Dict[VariantPair, TransformationRule]:
    return {
        (source, target): make_rule(
            target,
            node_drops=_NODE_DROPS.get((source, target), frozenset()),
        )
        for source in Variant
        for target in Variant
        if source != target
    }


DEFAULT_RULES: Dict[VariantPair, TransformationRule] = default_rules()
