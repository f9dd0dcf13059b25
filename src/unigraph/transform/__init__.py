"""
Type-directed transformation between graph variants.
"""

from unigraph.transform.rules import (
    DEFAULT_RULES,
    RuleOutcome,
    TransformationRule,
    make_rule,
)
from unigraph.transform.transformer import DataLossNotice, TransformationEngine

__all__ = [
    "DEFAULT_RULES",
    "RuleOutcome",
    "TransformationRule",
    "make_rule",
    "DataLossNotice",
    "TransformationEngine",
]
