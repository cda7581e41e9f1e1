from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, load_config, resolve_output_dir
from rules.layers import Layer


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "layercheck.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == ".layercheck"
    assert config.layers.unclassified == "ignore"
    assert config.layers.layer_directories()["domain"] is Layer.DOMAIN


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "include = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unknown_layer_name_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[layers.layer]]
name = "service"
globs = ["src/service/**"]
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_nested_layer_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[layers.layer]]
name = "domain"
globs = ["src/core/**"]
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_directory_mapping_must_be_single_segment(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[layers.directories]
"app/adapters" = "infrastructure"
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
exclude = [".venv/**"]
external = ["shop.generated.*"]

[layers]
unclassified = "deny"

[layers.directories]
adapters = "infrastructure"

[[layers.layer]]
name = "presentation"
globs = ["src/shop/api/**"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.exclude == [".venv/**"]
    assert config.external == ["shop.generated.*"]
    assert config.layers.unclassified == "deny"
    assert config.layers.directories == {"adapters": Layer.INFRASTRUCTURE}
    assert config.layers.layer[0].name is Layer.PRESENTATION
    assert config.layers.layer[0].globs == ["src/shop/api/**"]


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "missing.toml")


def test_explicit_config_path_is_read(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text('output_dir = "build/layers"', encoding="utf-8")

    config = load_config(tmp_path, config_path)

    assert config.output_dir == "build/layers"


@pytest.mark.parametrize("output_dir", ["", "~/out", "/abs/out", "../outside"])
def test_resolve_output_dir_rejects_unsafe_paths(
    tmp_path: Path, output_dir: str
) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


def test_resolve_output_dir_inside_root(tmp_path: Path) -> None:
    resolved = resolve_output_dir(tmp_path, ".layercheck")

    assert resolved == (tmp_path / ".layercheck").resolve()
