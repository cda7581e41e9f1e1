"""Source file discovery for layercheck."""

from __future__ import annotations

import logging
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        return path.resolve().is_relative_to(root.resolve())
    except OSError:
        return False


def _output_parts(output_dir: str) -> tuple[str, ...]:
    parts = output_dir.replace("\\", "/").split("/")
    return tuple(part for part in parts if part not in ("", "."))


def _matches_any(rel_path: str, patterns: list[str] | None) -> bool:
    return bool(patterns) and any(fnmatch(rel_path, pat) for pat in patterns or ())


def _should_include_file(
    path: Path,
    root: Path,
    *,
    output_parts: tuple[str, ...],
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a source file passes every filtering rule."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, root):
        return False

    rel_path = path.relative_to(root)
    rel_path_str = rel_path.as_posix()

    if "__pycache__" in rel_path.parts:
        return False

    if output_parts and rel_path.parts[: len(output_parts)] == output_parts:
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not _matches_any(rel_path_str, include_patterns):
        return False

    return not _matches_any(rel_path_str, exclude_patterns)


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted .gitignore files under root, skipping symlinks."""
    candidates = {root / ".gitignore", *root.rglob(".gitignore")}
    found = [
        path for path in candidates if path.is_file() and not path.is_symlink()
    ]
    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    matchers = [parse_gitignore(path) for path in _iter_gitignore_files(root)]
    if not matchers:
        return None

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # Path lies outside this .gitignore's base directory.
                continue
        return False

    return matches


def find_python_files(
    directory: Path,
    *,
    output_dir: str = ".layercheck",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all Python files in a directory, respecting .gitignore.

    Args:
        directory: Directory to search for Python files
        output_dir: Relative POSIX path of the artifacts directory to skip
            (default ".layercheck")
        include_patterns: Optional fnmatch patterns; when given, files must
            match at least one of them
        exclude_patterns: Optional fnmatch patterns; matching files are skipped
        nested_gitignore: Compose every .gitignore under ``directory``
            instead of only the root one

    Yields:
        Paths sorted lexicographically by relative POSIX path.
    """
    output_parts = _output_parts(output_dir)
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = sorted(
        (
            path
            for path in directory.rglob("*.py")
            if _should_include_file(
                path,
                directory,
                output_parts=output_parts,
                gitignore_matches=gitignore_matches,
                include_patterns=include_patterns,
                exclude_patterns=exclude_patterns,
            )
        ),
        key=lambda p: p.relative_to(directory).as_posix(),
    )
    logger.debug("Found %d Python files under %s", len(matched_files), directory)

    yield from matched_files


__all__ = ["find_python_files"]
