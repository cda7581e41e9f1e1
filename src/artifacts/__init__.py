"""Artifact generation for layercheck."""

from artifacts.models import ModuleRecord
from artifacts.write import write_check_artifacts

__all__ = ["ModuleRecord", "write_check_artifacts"]
