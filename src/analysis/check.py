"""Run the layer check over a repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION
from graph.algos import build_dependency_graph, find_cycles
from graph.builder import build_module_graph
from rules.config import load_config
from rules.layers import LAYER_ORDER
from rules.validator import LayerViolation, find_layer_violations

if TYPE_CHECKING:
    from pathlib import Path

    from graph.builder import ModuleGraph
    from rules.config import LayerCheckConfig

logger = logging.getLogger(__name__)


class CheckReport(BaseModel):
    """Outcome of a layer check over a source tree."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    module_count: int
    edge_count: int
    external_count: int = 0
    unclassified: list[str] = Field(default_factory=list)
    layer_counts: dict[str, int] = Field(default_factory=dict)
    cycles: list[list[str]] = Field(default_factory=list)
    violations: list[LayerViolation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def check_graph(graph: ModuleGraph) -> CheckReport:
    """Validate a module graph and summarise it.

    Each violation is annotated with the referencing file's path and the
    line numbers of the offending imports.
    """
    violations = [
        violation.model_copy(
            update={
                "path": graph.paths.get(violation.from_module),
                "lines": graph.lines_for(violation.from_module, violation.to_module),
            }
        )
        for violation in find_layer_violations(
            graph.to_specs(), external=graph.external
        )
    ]

    layer_counts = {layer.value: 0 for layer in LAYER_ORDER}
    for module in graph.modules:
        layer_counts[graph.layer_of(module).value] += 1

    cycles = find_cycles(build_dependency_graph(graph.edges_as_triples()))

    logger.info(
        "Layer check found %d violation(s) across %d module(s)",
        len(violations),
        len(graph.modules),
    )

    return CheckReport(
        module_count=len(graph.modules),
        edge_count=len(graph.unique_edges()),
        external_count=len(graph.external),
        unclassified=graph.unclassified,
        layer_counts=layer_counts,
        cycles=cycles,
        violations=violations,
    )


def check_repository(
    root: Path,
    config: LayerCheckConfig | None = None,
) -> CheckReport:
    """Build the module graph under ``root`` and report layer violations.

    Raises:
        UnknownLayerError: Propagated from graph building or validation.
        DanglingReferenceError: An import names a project module that was
            not scanned and is not configured as external.
        ConfigError: ``layercheck.toml`` is invalid (only when ``config``
            is None and the file is loaded here).
    """
    if config is None:
        config = load_config(root)

    return check_graph(build_module_graph(root, config))


__all__ = ["CheckReport", "check_graph", "check_repository"]
