from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from artifacts.write import write_check_artifacts
from contract.artifacts import DEPS_EDGELIST
from verify.verify import DeterminismResult, verify_determinism

FIXTURE_REPO = Path(__file__).parent / "fixtures" / "clean_repo"


def _copy_fixture(tmp_path: Path) -> Path:
    repo_root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, repo_root)
    return repo_root


def test_verify_determinism_requires_artifacts_dir(tmp_path: Path) -> None:
    repo_root = _copy_fixture(tmp_path)

    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=repo_root, artifacts_dir=tmp_path / "missing")


def test_verify_determinism_rejects_file_path(tmp_path: Path) -> None:
    repo_root = _copy_fixture(tmp_path)
    not_a_dir = tmp_path / "artifacts.txt"
    not_a_dir.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        verify_determinism(root=repo_root, artifacts_dir=not_a_dir)


def test_fresh_artifacts_verify_ok(tmp_path: Path) -> None:
    repo_root = _copy_fixture(tmp_path)
    write_check_artifacts(root=repo_root)

    result = verify_determinism(
        root=repo_root, artifacts_dir=repo_root / ".layercheck"
    )

    assert result == DeterminismResult(ok=True)


def test_drift_is_reported_by_relative_path(tmp_path: Path) -> None:
    repo_root = _copy_fixture(tmp_path)
    artifacts_dir = tmp_path / "artifacts"
    write_check_artifacts(root=repo_root, out_dir=artifacts_dir)

    (artifacts_dir / DEPS_EDGELIST).write_text("stale -> edge\n", encoding="utf-8")
    (artifacts_dir / "notes.txt").write_text("extra", encoding="utf-8")

    result = verify_determinism(root=repo_root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=(DEPS_EDGELIST,),
        missing=("notes.txt",),
        extra=(),
    )
