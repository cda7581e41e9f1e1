"""Build the module reference graph from a source tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fnmatch import fnmatch
from typing import TYPE_CHECKING

from parse.ast_imports import extract_imports, resolve_relative_import
from rules.config import LayerCheckConfig
from rules.errors import LayerCheckError, UnknownLayerError
from rules.layers import Layer, classify_layer
from rules.validator import ModuleSpec
from scan.files import find_python_files
from utils import is_package_path, path_to_module

if TYPE_CHECKING:
    from pathlib import Path

    from parse.ast_imports import ImportStatement

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class ImportEdge:
    """A resolved import between two classified modules."""

    source: str
    target: str
    line: int


@dataclass
class ModuleGraph:
    """Snapshot of a source tree's modules, layers and references."""

    modules: dict[str, ModuleSpec] = field(default_factory=dict)
    namespaces: dict[str, Layer] = field(default_factory=dict)
    paths: dict[str, str] = field(default_factory=dict)
    external: set[str] = field(default_factory=set)
    unclassified: list[str] = field(default_factory=list)
    edges: list[ImportEdge] = field(default_factory=list)

    def to_specs(self) -> dict[str, ModuleSpec]:
        specs = {name: ModuleSpec(layer) for name, layer in self.namespaces.items()}
        specs.update(self.modules)
        return specs

    def layer_of(self, module: str) -> Layer:
        return Layer(self.modules[module].layer)

    def lines_for(self, source: str, target: str) -> list[int]:
        return sorted(
            {e.line for e in self.edges if e.source == source and e.target == target}
        )

    def unique_edges(self) -> list[tuple[str, str]]:
        return sorted({(e.source, e.target) for e in self.edges})

    def edges_as_triples(self) -> list[tuple[str, str, int]]:
        return [(e.source, e.target, e.line) for e in self.edges]


@dataclass
class _ScannedModule:
    module: str
    path: str
    file_path: Path
    layer: Layer | None


def _matches_external(module: str, patterns: list[str]) -> bool:
    return any(fnmatch(module, pattern) for pattern in patterns)


def _module_prefixes(module: str) -> list[str]:
    parts = module.split(".")
    return [".".join(parts[:i]) for i in range(1, len(parts))]


def _scan_modules(root: Path, config: LayerCheckConfig) -> list[_ScannedModule]:
    scanned: dict[str, _ScannedModule] = {}
    for file_path in find_python_files(
        root,
        output_dir=config.output_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        rel_path = file_path.relative_to(root).as_posix()
        try:
            module = path_to_module(rel_path)
        except ValueError:
            logger.debug("Skipping %s: no module name", rel_path)
            continue

        if module in scanned:
            logger.warning(
                "Module %s defined by both %s and %s; keeping the first",
                module,
                scanned[module].path,
                rel_path,
            )
            continue

        scanned[module] = _ScannedModule(
            module=module,
            path=rel_path,
            file_path=file_path,
            layer=classify_layer(rel_path, config.layers),
        )
    return list(scanned.values())


def _namespace_layers(
    scanned: list[_ScannedModule],
    namespaces: set[str],
    config: LayerCheckConfig,
) -> dict[str, Layer]:
    """Classify namespace packages by the directory that holds them."""
    directories: dict[str, str] = {}
    for entry in scanned:
        parts = entry.path.split("/")
        offset = 1 if len(parts) >= 2 and parts[0] == "src" else 0
        for prefix in _module_prefixes(entry.module):
            if prefix in namespaces:
                depth = offset + prefix.count(".") + 1
                directories.setdefault(prefix, "/".join(parts[:depth]))

    layers: dict[str, Layer] = {}
    for namespace, directory in sorted(directories.items()):
        if _matches_external(namespace, config.external):
            continue
        layer = classify_layer(f"{directory}/__init__.py", config.layers)
        if layer is not None:
            layers[namespace] = layer
    return layers


def _import_targets(
    stmt: ImportStatement,
    package: str,
    known: set[str],
) -> list[str]:
    """Return the module names an import statement refers to."""
    if not stmt.is_from:
        return [stmt.module]

    if stmt.is_relative:
        base = resolve_relative_import(package, stmt.module, stmt.level)
    else:
        base = stmt.module

    if not base:
        return []

    if stmt.is_star:
        return [base]

    targets: list[str] = []
    for name in stmt.names:
        submodule = f"{base}.{name}"
        target = submodule if submodule in known else base
        if target not in targets:
            targets.append(target)
    return targets


def build_module_graph(
    root: Path,
    config: LayerCheckConfig | None = None,
) -> ModuleGraph:
    """Scan ``root`` and build the module graph the validator consumes.

    Raises:
        LayerCheckError: If ``root`` is missing or is not a directory.
        UnknownLayerError: If ``layers.unclassified`` is "deny" and a file
            lies outside every layer directory.
    """
    if not root.is_dir():
        msg = f"Repository root is not a directory: {root}"
        raise LayerCheckError(msg)

    if config is None:
        config = LayerCheckConfig()

    scanned = _scan_modules(root, config)
    known = {entry.module for entry in scanned}
    namespaces = {p for m in known for p in _module_prefixes(m)} - known
    top_level = {m.split(".")[0] for m in known}
    importable = known | namespaces

    graph = ModuleGraph(namespaces=_namespace_layers(scanned, namespaces, config))
    exempt_modules: set[str] = set()
    classified: list[_ScannedModule] = []

    for entry in scanned:
        if _matches_external(entry.module, config.external):
            exempt_modules.add(entry.module)
            continue
        if entry.layer is None:
            if config.layers.unclassified == "deny":
                raise UnknownLayerError(entry.path)
            logger.debug("Unclassified module %s (%s)", entry.module, entry.path)
            graph.unclassified.append(entry.path)
            exempt_modules.add(entry.module)
            continue
        classified.append(entry)

    classified_ids = {entry.module for entry in classified}

    for entry in classified:
        package = (
            entry.module
            if is_package_path(entry.path)
            else entry.module.rpartition(".")[0]
        )
        references: set[str] = set()

        for stmt in extract_imports(entry.file_path):
            targets = _import_targets(stmt, package, importable)
            if not targets:
                logger.warning(
                    "%s:%d: relative import climbs above the top-level package",
                    entry.path,
                    stmt.lineno,
                )
            for target in targets:
                if target == entry.module:
                    continue
                if target in classified_ids or target in graph.namespaces:
                    references.add(target)
                    graph.edges.append(ImportEdge(entry.module, target, stmt.lineno))
                elif (
                    target in exempt_modules
                    or target in namespaces
                    or target.split(".")[0] not in top_level
                    or _matches_external(target, config.external)
                ):
                    graph.external.add(target)
                else:
                    references.add(target)

        graph.modules[entry.module] = ModuleSpec(
            layer=entry.layer, references=frozenset(references)
        )
        graph.paths[entry.module] = entry.path

    graph.edges.sort()
    graph.unclassified.sort()
    logger.info(
        "Scanned %d modules: %d classified, %d unclassified, %d external references",
        len(scanned),
        len(graph.modules),
        len(graph.unclassified),
        len(graph.external),
    )
    return graph


__all__ = ["ImportEdge", "ModuleGraph", "build_module_graph"]
