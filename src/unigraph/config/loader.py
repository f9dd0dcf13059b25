from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from dynaconf import Dynaconf

from unigraph.config.constants import DEFAULTS
from unigraph.config.settings import (
    CompositionOptions,
    ConflictResolution,
    TransformationOptions,
    UnigraphConfig,
)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def build_settings(overrides: Optional[Dict[str, Any]] = None) -> Dynaconf:
    """
    Settings layered as DEFAULTS < UNIGRAPH_* environment < overrides.
    """
    settings = Dynaconf(
        envvar_prefix="UNIGRAPH",
        load_dotenv=True,
        settings_files=[],
    )
    for key, value in DEFAULTS.items():
        if settings.get(key) is None:
            settings.set(key, value)
    if overrides:
        settings.update(overrides)
    return settings


def load_config(overrides: Optional[Dict[str, Any]] = None) -> UnigraphConfig:
    settings = build_settings(overrides)

    policy = settings.get("COMPOSE_CONFLICT_RESOLUTION", "fail")
    try:
        resolution = ConflictResolution.parse(policy)
    except ValueError:
        logging.getLogger("unigraph.config").warning(
            "unknown conflict resolution %r; falling back to fail", policy
        )
        resolution = ConflictResolution.FAIL

    return UnigraphConfig(
        transformation=TransformationOptions(
            preserve_unmapped_metadata=_parse_bool(
                settings.get("TRANSFORM_PRESERVE_UNMAPPED_METADATA", True)
            ),
        ),
        composition=CompositionOptions(
            conflict_resolution=resolution,
            validate_edges=_parse_bool(settings.get("COMPOSE_VALIDATE_EDGES", True)),
            name=str(settings.get("COMPOSE_DEFAULT_NAME", "Composed Graph")),
        ),
    )
