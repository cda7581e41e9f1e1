"""Artifact record models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION
from rules.layers import Layer


class ModuleRecord(BaseModel):
    """A classified module and the layer it belongs to."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    path: str
    module: str
    layer: Layer
    is_package: bool


__all__ = ["ModuleRecord"]
