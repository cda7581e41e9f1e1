from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from analysis.check import check_graph
from artifacts.models import ModuleRecord
from artifacts.utils import (
    _get_output_dir_relpath,
    _write_edgelist,
    _write_json,
    _write_jsonl,
)
from contract.artifacts import DEPS_EDGELIST, LAYER_CHECK_JSON, MODULES_JSONL
from graph.builder import build_module_graph
from rules.config import load_config, resolve_output_dir
from utils import is_package_path

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import LayerCheckConfig

logger = logging.getLogger(__name__)


def write_check_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: LayerCheckConfig | None = None,
) -> dict[str, object]:
    """Run the layer check and write deterministic artifacts.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory (default: config ``output_dir``)
        config: Optional configuration; loaded from ``root`` when omitted

    Returns:
        Dictionary with counts and the list of written artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    out_dir_rel = _get_output_dir_relpath(out_dir, root)
    if out_dir_rel and out_dir_rel != config.output_dir:
        config = config.model_copy(update={"output_dir": out_dir_rel})

    graph = build_module_graph(root, config)
    report = check_graph(graph)

    out_dir.mkdir(parents=True, exist_ok=True)

    records = [
        ModuleRecord(
            path=graph.paths[module],
            module=module,
            layer=graph.layer_of(module),
            is_package=is_package_path(graph.paths[module]),
        )
        for module in sorted(graph.modules)
    ]
    _write_jsonl(out_dir / MODULES_JSONL, records)
    _write_edgelist(out_dir / DEPS_EDGELIST, graph.unique_edges())
    _write_json(out_dir / LAYER_CHECK_JSON, report)

    artifacts_list = [MODULES_JSONL, DEPS_EDGELIST, LAYER_CHECK_JSON]
    logger.debug("Wrote %d artifacts to %s", len(artifacts_list), out_dir)

    return {
        "module_count": report.module_count,
        "edge_count": report.edge_count,
        "violation_count": len(report.violations),
        "cycle_count": len(report.cycles),
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
