"""Error taxonomy for layer checking."""

from __future__ import annotations


class LayerCheckError(Exception):
    """Base class for errors raised by layercheck."""


class UnknownLayerError(LayerCheckError):
    """Raised when a module's layer cannot be determined."""

    def __init__(self, module: str, value: object = None) -> None:
        self.module = module
        self.value = value
        if value is None:
            msg = f"Cannot determine layer for module '{module}'"
        else:
            msg = f"Unknown layer {value!r} for module '{module}'"
        super().__init__(msg)


class DanglingReferenceError(LayerCheckError):
    """Raised when a module references an identifier that is neither
    present in the module graph nor marked external."""

    def __init__(self, module: str, reference: str) -> None:
        self.module = module
        self.reference = reference
        msg = (
            f"Module '{module}' references '{reference}', which is not in the "
            "module graph and is not marked external"
        )
        super().__init__(msg)


__all__ = ["DanglingReferenceError", "LayerCheckError", "UnknownLayerError"]
