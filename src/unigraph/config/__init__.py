"""
Configuration layer for unigraph.

Option objects are frozen dataclasses passed explicitly to the engines.
Process-wide defaults come from DEFAULTS, overridable through UNIGRAPH_*
environment variables via dynaconf.
"""

from unigraph.config.settings import (
    ConflictResolution,
    TransformationOptions,
    CompositionOptions,
    UnigraphConfig,
)
from unigraph.config.loader import load_config

__all__ = [
    "ConflictResolution",
    "TransformationOptions",
    "CompositionOptions",
    "UnigraphConfig",
    "load_config",
]
