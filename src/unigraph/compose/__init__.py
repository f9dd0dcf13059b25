"""
Composition of several graphs, possibly of different variants, into one.
"""

from unigraph.compose.conflicts import EdgeConflict, NodeConflict
from unigraph.compose.composer import CompositionEngine

__all__ = [
    "EdgeConflict",
    "NodeConflict",
    "CompositionEngine",
]
