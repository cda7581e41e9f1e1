"""Parsing utilities for layercheck."""

from parse.ast_imports import ImportStatement, extract_imports, resolve_relative_import

__all__ = [
    "ImportStatement",
    "extract_imports",
    "resolve_relative_import",
]
