"""Utility functions for artifact writing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def _to_dict(obj: object) -> object:
    """Convert a pydantic model to plain data for JSON serialization."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    return obj


def _write_jsonl(path: Path, records: Sequence[object]) -> None:
    with path.open("wb") as f:
        for rec in records:
            f.write(orjson.dumps(_to_dict(rec), option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")


def _write_json(path: Path, obj: object) -> None:
    path.write_bytes(_dump_json(obj))


def _dump_json(obj: object) -> bytes:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
    return orjson.dumps(_to_dict(obj), option=opts)


def _write_edgelist(path: Path, edges: Sequence[tuple[str, str]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for source, target in edges:
            f.write(f"{source} -> {target}\n")


def _get_output_dir_relpath(out_dir: Path, root: Path) -> str:
    """Return out_dir as a POSIX path relative to root, or "" when outside."""
    try:
        rel = out_dir.resolve().relative_to(root.resolve())
    except ValueError:
        # out_dir is outside the root; nothing to filter.
        return ""
    return rel.as_posix() if rel.parts else ""
