"""Layer definitions, configuration and the dependency validator."""

from rules.config import (
    ConfigError,
    LayerCheckConfig,
    LayersConfig,
    load_config,
)
from rules.errors import DanglingReferenceError, LayerCheckError, UnknownLayerError
from rules.layers import (
    Layer,
    classify_layer,
    is_violation,
    layer_rank,
    parse_layer,
    require_layer,
)
from rules.validator import LayerViolation, ModuleSpec, find_layer_violations

__all__ = [
    "ConfigError",
    "DanglingReferenceError",
    "Layer",
    "LayerCheckConfig",
    "LayerCheckError",
    "LayerViolation",
    "LayersConfig",
    "ModuleSpec",
    "UnknownLayerError",
    "classify_layer",
    "find_layer_violations",
    "is_violation",
    "layer_rank",
    "load_config",
    "parse_layer",
    "require_layer",
]
