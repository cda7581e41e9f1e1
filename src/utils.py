"""Shared utilities for layercheck."""

from __future__ import annotations

from pathlib import Path


def path_to_module(file_path: str | Path) -> str:
    """Convert a file path to a Python module name.

    Args:
        file_path: Relative file path (e.g., "src/shop/domain/order.py")

    Returns:
        Module name (e.g., "shop.domain.order")

    Raises:
        ValueError: If the path does not yield a non-empty module name.

    Examples:
        >>> path_to_module("src/shop/domain/order.py")
        'shop.domain.order'
        >>> path_to_module("src/shop/__init__.py")
        'shop'
        >>> path_to_module(Path("shop/presentation/api.py"))
        'shop.presentation.api'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    normalized_parts = [part for part in path_str.replace("\\", "/").split("/") if part]

    # src/<package>/... maps to <package>.<submodules>.
    module_parts = (
        normalized_parts[1:]
        if len(normalized_parts) >= 2 and normalized_parts[0] == "src"
        else normalized_parts
    )

    if module_parts and module_parts[-1].endswith(".py"):
        module_parts[-1] = module_parts[-1][:-3]

    if module_parts and module_parts[-1] == "__init__":
        module_parts = module_parts[:-1]

    if not module_parts:
        msg = f"Path '{path_str}' does not map to a non-empty module name"
        raise ValueError(msg)

    return ".".join(module_parts)


def is_package_path(file_path: str) -> bool:
    """Return True when the path is a package's ``__init__.py``."""
    return file_path.replace("\\", "/").rsplit("/", 1)[-1] == "__init__.py"
