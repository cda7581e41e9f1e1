"""Layer dependency validation over a module reference graph.

The validator is a pure function: it takes a mapping of module identifier
to ``(layer, references)`` and returns every reference that points from an
inner layer to an outer one. It performs no I/O and does not mutate its
inputs, so repeated calls on the same graph give identical results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, Field

from rules.errors import DanglingReferenceError
from rules.layers import Layer, is_violation, parse_layer

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping


class ModuleSpec(NamedTuple):
    """A module's layer and the identifiers it references."""

    layer: Layer | str
    references: Collection[str] = ()


class LayerViolation(BaseModel):
    """A reference from an inner layer to an outer one."""

    from_module: str
    from_layer: Layer
    to_module: str
    to_layer: Layer
    path: str | None = None
    lines: list[int] = Field(default_factory=list)

    def as_tuple(self) -> tuple[str, Layer, str, Layer]:
        return (self.from_module, self.from_layer, self.to_module, self.to_layer)


def _resolve_layers(
    modules: Mapping[str, ModuleSpec | tuple[Layer | str, Collection[str]]],
) -> dict[str, Layer]:
    return {
        module_id: parse_layer(modules[module_id][0], module=module_id)
        for module_id in sorted(modules)
    }


def find_layer_violations(
    modules: Mapping[str, ModuleSpec | tuple[Layer | str, Collection[str]]],
    *,
    external: Collection[str] = (),
) -> list[LayerViolation]:
    """Report every reference edge that breaks the inward-dependency rule.

    Args:
        modules: Module identifier -> (layer, referenced identifiers).
        external: Identifiers exempt from the check when they are not
            themselves keys of ``modules``.

    Returns:
        Violations ordered by ``from_module`` then ``to_module``.

    Raises:
        UnknownLayerError: If any module's layer is not a known layer.
        DanglingReferenceError: If a referenced identifier is neither a key
            of ``modules`` nor listed in ``external``.
        TypeError: If a module's references are a bare string rather than
            a collection of identifiers.
    """
    layers = _resolve_layers(modules)
    external_ids = frozenset(external)

    violations: list[LayerViolation] = []
    for module_id, from_layer in layers.items():
        references = modules[module_id][1]
        if isinstance(references, str):
            msg = (
                f"References of module '{module_id}' must be a collection of "
                f"identifiers, not the string {references!r}"
            )
            raise TypeError(msg)
        for target in sorted(set(references)):
            to_layer = layers.get(target)
            if to_layer is None:
                if target in external_ids:
                    continue
                raise DanglingReferenceError(module_id, target)

            if is_violation(from_layer, to_layer):
                violations.append(
                    LayerViolation(
                        from_module=module_id,
                        from_layer=from_layer,
                        to_module=target,
                        to_layer=to_layer,
                    )
                )

    return violations


__all__ = ["LayerViolation", "ModuleSpec", "find_layer_violations"]
