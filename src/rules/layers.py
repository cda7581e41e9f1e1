"""Layer classification and violation detection."""

from __future__ import annotations

from enum import Enum
from fnmatch import fnmatch
from typing import TYPE_CHECKING

from rules.errors import UnknownLayerError

if TYPE_CHECKING:
    from rules.config import LayersConfig


class Layer(str, Enum):
    """The four concentric layers, innermost first."""

    DOMAIN = "domain"
    APPLICATION = "application"
    INFRASTRUCTURE = "infrastructure"
    PRESENTATION = "presentation"

    @property
    def rank(self) -> int:
        return LAYER_ORDER.index(self)


LAYER_ORDER: tuple[Layer, ...] = (
    Layer.DOMAIN,
    Layer.APPLICATION,
    Layer.INFRASTRUCTURE,
    Layer.PRESENTATION,
)

DEFAULT_LAYER_DIRECTORIES: dict[str, Layer] = {layer.value: layer for layer in Layer}


def layer_rank(layer: Layer) -> int:
    """Return the rank of a layer (0 = innermost)."""
    return layer.rank


def parse_layer(value: Layer | str, *, module: str | None = None) -> Layer:
    """Coerce a layer name into a Layer.

    Raises:
        UnknownLayerError: If ``value`` does not name one of the four layers.
    """
    if isinstance(value, Layer):
        return value
    if isinstance(value, str):
        try:
            return Layer(value.strip().lower())
        except ValueError:
            pass
    raise UnknownLayerError(module or "<unknown>", value)


def is_violation(from_layer: Layer, to_layer: Layer) -> bool:
    """Check if a reference from one layer to another points outward."""
    return to_layer.rank > from_layer.rank


def allowed_layers(layer: Layer) -> frozenset[Layer]:
    """Return the layers a module in ``layer`` may reference."""
    return frozenset(LAYER_ORDER[: layer.rank + 1])


def _path_segments(path: str) -> list[str]:
    segments = [part for part in path.replace("\\", "/").split("/") if part]
    if segments and segments[-1].endswith(".py"):
        segments[-1] = segments[-1][:-3]
    if segments and segments[-1] == "__init__":
        segments = segments[:-1]
    return segments


def classify_layer(path: str, layers_config: LayersConfig) -> Layer | None:
    """Classify a file path into an architectural layer.

    Explicit glob overrides are tried first with first-match-wins
    semantics. Otherwise the outermost path segment naming a layer
    directory (e.g. ``domain/``) determines the layer.
    """
    for layer_def in layers_config.layer:
        for glob_pattern in layer_def.globs:
            if fnmatch(path, glob_pattern):
                return layer_def.name

    directories = layers_config.layer_directories()
    for segment in _path_segments(path):
        layer = directories.get(segment)
        if layer is not None:
            return layer
    return None


def require_layer(path: str, layers_config: LayersConfig) -> Layer:
    """Like :func:`classify_layer`, but fail when no layer matches."""
    layer = classify_layer(path, layers_config)
    if layer is None:
        raise UnknownLayerError(path)
    return layer


__all__ = [
    "DEFAULT_LAYER_DIRECTORIES",
    "LAYER_ORDER",
    "Layer",
    "allowed_layers",
    "classify_layer",
    "is_violation",
    "layer_rank",
    "parse_layer",
    "require_layer",
]
