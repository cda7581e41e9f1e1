"""AST-based import extraction."""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportStatement:
    """A single ``import`` or ``from ... import`` statement.

    ``module`` is the dotted name after ``import`` (plain imports) or after
    ``from`` (from-imports; empty for ``from . import x``). ``names`` holds
    the imported names of a from-import, ``("*",)`` for star imports, and
    is empty for plain imports. ``level`` counts leading dots.
    """

    lineno: int
    module: str
    names: tuple[str, ...] = ()
    level: int = 0

    @property
    def is_from(self) -> bool:
        return bool(self.names)

    @property
    def is_relative(self) -> bool:
        return self.level > 0

    @property
    def is_star(self) -> bool:
        return self.names == ("*",)


def _statements_for_node(node: ast.AST) -> list[ImportStatement]:
    if isinstance(node, ast.Import):
        return [ImportStatement(node.lineno, alias.name) for alias in node.names]
    if isinstance(node, ast.ImportFrom):
        names = tuple(alias.name for alias in node.names)
        return [ImportStatement(node.lineno, node.module or "", names, node.level)]
    return []


def extract_imports(file_path: Path) -> list[ImportStatement]:
    """Extract import statements from a Python file using AST.

    Imports are collected from the whole tree, including function bodies
    and ``if TYPE_CHECKING:`` blocks, ordered by line number.
    Files that cannot be decoded or parsed yield no imports.
    """
    try:
        source = file_path.read_text(encoding="utf-8")
        tree = ast.parse(source, str(file_path))
    except (SyntaxError, UnicodeDecodeError) as exc:
        logger.warning("Skipping imports of unparseable file %s: %s", file_path, exc)
        return []

    statements: list[ImportStatement] = []
    for node in ast.walk(tree):
        statements.extend(_statements_for_node(node))

    statements.sort(key=lambda stmt: (stmt.lineno, stmt.module, stmt.names))
    return statements


def resolve_relative_import(package: str, module: str, level: int) -> str | None:
    """Resolve a relative import to an absolute module name.

    Args:
        package: Package the importing module lives in. For a package's
            ``__init__.py`` this is the package itself.
        module: The dotted name after the dots (may be empty).
        level: Number of leading dots (1 for ".", 2 for "..", etc.)

    Returns:
        The absolute module name, or None when the import climbs above the
        top-level package.

    Examples:
        >>> resolve_relative_import("pkg.sub", "foo", 1)
        'pkg.sub.foo'
        >>> resolve_relative_import("pkg.sub", "", 1)
        'pkg.sub'
        >>> resolve_relative_import("pkg.sub", "bar", 2)
        'pkg.bar'
    """
    if level <= 0:
        return module or None

    parts = package.split(".") if package else []
    if level - 1 >= len(parts):
        return None

    base_parts = parts[: len(parts) - (level - 1)]
    if module:
        base_parts.append(module)
    return ".".join(base_parts)


__all__ = ["ImportStatement", "extract_imports", "resolve_relative_import"]
