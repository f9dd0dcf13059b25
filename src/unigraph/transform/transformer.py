from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional, Union

from unigraph.config.loader import load_config
from unigraph.config.settings import TransformationOptions, UnigraphConfig
from unigraph.graph.graph_errors import NotSupported, UnknownVariant
from unigraph.graph.graph_schema import Variant, copy_attributes, new_id
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.unified_graph import UnifiedGraph
from unigraph.transform.rules import DEFAULT_RULES, TransformationRule, VariantPair


class DataLossNotice(NamedTuple):
    element_id: str
    attribute: str


class TransformationEngine:
    """
    Converts a graph of one variant into a new graph of another.

    Every node and edge keeps its id and endpoints; only type tags and
    attributes are reshaped by the rule registered for the variant pair.
    The source graph is only read.
    """

    def __init__(
        self,
        *,
        config: Optional[UnigraphConfig] = None,
        registry: Optional[GraphRegistry] = None,
        rules: Optional[Dict[VariantPair, TransformationRule]] = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.registry = registry
        self._rules: Dict[VariantPair, TransformationRule] = dict(
            DEFAULT_RULES if rules is None else rules
        )

    # ------------------------------------------------------------------
    # Rule table
    # ------------------------------------------------------------------

    def register_rule(
        self,
        source: Union[Variant, str],
        target: Union[Variant, str],
        rule: TransformationRule,
    ) -> None:
        self._rules[(Variant.parse(source), Variant.parse(target))] = rule

    def is_supported(self, source: Union[Variant, str], target: Union[Variant, str]) -> bool:
        try:
            pair = (Variant.parse(source), Variant.parse(target))
        except UnknownVariant:
            return False
        return pair in self._rules

    def supported_pairs(self) -> List[VariantPair]:
        return list(self._rules)

    def _rule_for(
        self,
        source: Variant,
        target: Union[Variant, str],
    ) -> tuple[Variant, TransformationRule]:
        try:
            target_variant = Variant.parse(target)
        except UnknownVariant:
            raise NotSupported(source.value, str(target)) from None

        rule = self._rules.get((source, target_variant))
        if rule is None:
            raise NotSupported(source.value, target_variant.value)
        return target_variant, rule

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def transform(
        self,
        source: UnifiedGraph,
        target_variant: Union[Variant, str],
        options: Optional[TransformationOptions] = None,
    ) -> UnifiedGraph:
        """
        Build a new graph of target_variant from source.

        Attributes dropped by the rule are logged, never raised; use
        preview_data_loss to inspect them beforehand.
        """
        options = options if options is not None else self.config.transformation
        target, rule = self._rule_for(source.variant, target_variant)

        metadata = source.metadata
        attributes = (
            copy_attributes(metadata.attributes)
            if options.preserve_unmapped_metadata
            else {}
        )
        attributes["transformed_from"] = source.variant.value
        attributes["source_graph_id"] = source.graph_id

        output = UnifiedGraph.create(
            options.graph_id or new_id(),
            target,
            options.name or metadata.display_name,
            attributes=attributes,
        )

        dropped = 0
        for node in source.nodes():
            outcome = rule.node_rule(node, options)
            dropped += len(outcome.dropped)
            output.add_node(outcome.element.id, outcome.element.data)

        for edge in source.edges():
            outcome = rule.edge_rule(edge, options)
            dropped += len(outcome.dropped)
            output.add_edge(
                outcome.element.id,
                outcome.element.source,
                outcome.element.target,
                outcome.element.data,
            )

        if self.registry is not None:
            self.registry.register(output.graph_id)

        logger = logging.getLogger("unigraph.transform")
        logger.info(
            "transformed %s (%s -> %s): nodes=%d edges=%d",
            source.graph_id,
            source.variant.value,
            target.value,
            output.node_count(),
            output.edge_count(),
        )
        if dropped:
            logger.info("dropped %d attribute(s) during transformation", dropped)

        return output

    def preview_data_loss(
        self,
        source: UnifiedGraph,
        target_variant: Union[Variant, str],
    ) -> List[DataLossNotice]:
        """
        Dry run of transform() listing every attribute the rule would drop.

        Nodes come first, then edges, each in insertion order.
        """
        _, rule = self._rule_for(source.variant, target_variant)
        options = self.config.transformation

        notices: List[DataLossNotice] = []
        for node in source.nodes():
            for attribute in rule.node_rule(node, options).dropped:
                notices.append(DataLossNotice(node.id, attribute))
        for edge in source.edges():
            for attribute in rule.edge_rule(edge, options).dropped:
                notices.append(DataLossNotice(edge.id, attribute))
        return notices
