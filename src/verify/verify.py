"""Determinism verification for layercheck artifacts."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.write import write_check_artifacts

if TYPE_CHECKING:
    from rules.config import LayerCheckConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _snapshot(directory: Path) -> dict[str, bytes]:
    """Map each file's relative POSIX path to its contents."""
    return {
        path.relative_to(directory).as_posix(): path.read_bytes()
        for path in directory.rglob("*")
        if path.is_file()
    }


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    config: LayerCheckConfig | None = None,
) -> DeterminismResult:
    """Verify that existing artifacts match a fresh regeneration.

    Artifacts are regenerated into a temporary directory and compared
    byte-for-byte with ``artifacts_dir`` by relative path.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        write_check_artifacts(root=root, out_dir=temp_path, config=config)
        regenerated = _snapshot(temp_path)

    original = _snapshot(artifacts_dir)

    missing = tuple(sorted(original.keys() - regenerated.keys()))
    extra = tuple(sorted(regenerated.keys() - original.keys()))
    mismatches = tuple(
        sorted(
            name
            for name in original.keys() & regenerated.keys()
            if original[name] != regenerated[name]
        )
    )

    ok = not (missing or extra or mismatches)
    if not ok:
        logger.info(
            "Artifacts drifted: %d missing, %d extra, %d mismatched",
            len(missing),
            len(extra),
            len(mismatches),
        )
    return DeterminismResult(
        ok=ok, mismatches=mismatches, missing=missing, extra=extra
    )
