from __future__ import annotations

from pathlib import Path

from analysis.check import check_repository
from rules.config import load_config
from rules.layers import Layer, classify_layer

REPO_ROOT = Path(__file__).parent.parent


def test_sentinel_file_classification() -> None:
    config = load_config(REPO_ROOT)

    assert classify_layer("src/cli.py", config.layers) is Layer.PRESENTATION
    assert classify_layer("src/verify/verify.py", config.layers) is Layer.INFRASTRUCTURE
    assert classify_layer("src/contract/artifacts.py", config.layers) is Layer.DOMAIN
    assert classify_layer("src/contract/validation.py", config.layers) is (
        Layer.INFRASTRUCTURE
    )
    assert classify_layer("src/graph/builder.py", config.layers) is Layer.APPLICATION
    assert classify_layer("src/rules/validator.py", config.layers) is Layer.DOMAIN


def test_all_src_files_classified() -> None:
    config = load_config(REPO_ROOT)

    unclassified_files = [
        path.relative_to(REPO_ROOT).as_posix()
        for path in (REPO_ROOT / "src").rglob("*.py")
        if classify_layer(path.relative_to(REPO_ROOT).as_posix(), config.layers) is None
    ]

    assert unclassified_files == []


def test_layercheck_source_respects_its_own_layers() -> None:
    report = check_repository(REPO_ROOT)

    assert report.violations == []
    assert report.unclassified == []
