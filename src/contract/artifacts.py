"""Artifact contract definitions.

Filenames, formats and the schema version written by ``layercheck generate``.
"""

from __future__ import annotations

from dataclasses import dataclass

# Bump when a record shape changes incompatibly.
ARTIFACT_SCHEMA_VERSION = 1

MODULES_JSONL = "modules.jsonl"
DEPS_EDGELIST = "deps.edgelist"
LAYER_CHECK_JSON = "layer_check.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a generated artifact."""

    filename: str
    format: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "modules": ArtifactSpec(filename=MODULES_JSONL, format="jsonl"),
    "deps_edgelist": ArtifactSpec(filename=DEPS_EDGELIST, format="edgelist"),
    "layer_check": ArtifactSpec(filename=LAYER_CHECK_JSON, format="json"),
}
