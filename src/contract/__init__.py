"""Stable artifact contract surface for layercheck.

Filenames and the schema version are imported eagerly. Models and
validation helpers load on first access to keep ``contract.artifacts``
free of import cycles.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    DEPS_EDGELIST,
    LAYER_CHECK_JSON,
    MODULES_JSONL,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name == "ModuleRecord":
        from artifacts.models import ModuleRecord

        return ModuleRecord

    if name == "CheckReport":
        from analysis.check import CheckReport

        return CheckReport

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract import validation

        return getattr(validation, name)

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "DEPS_EDGELIST",
    "LAYER_CHECK_JSON",
    "MODULES_JSONL",
    "ArtifactSpec",
    "CheckReport",
    "ModuleRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
