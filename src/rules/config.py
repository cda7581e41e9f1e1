from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rules.errors import LayerCheckError
from rules.layers import DEFAULT_LAYER_DIRECTORIES, Layer

CONFIG_FILENAME = "layercheck.toml"

UnclassifiedBehavior = Literal["deny", "ignore"]


class LayerDef(BaseModel):
    """Explicit glob override assigning files to a layer."""

    model_config = ConfigDict(extra="forbid")

    name: Layer = Field(description="Layer the matching files belong to")
    globs: list[str] = Field(
        description="Glob patterns for files belonging to this layer"
    )


class LayersConfig(BaseModel):
    """Configuration for architectural layer classification."""

    model_config = ConfigDict(extra="forbid")

    layer: list[LayerDef] = Field(
        default_factory=list,
        description="Glob overrides (first match wins, tried before directories)",
    )
    directories: dict[str, Layer] = Field(
        default_factory=dict,
        description="Additional directory name -> layer mappings",
    )
    unclassified: UnclassifiedBehavior = Field(
        default="ignore",
        description="Behavior for files outside every layer directory",
    )

    @field_validator("directories")
    @classmethod
    def validate_directories(cls, v: dict[str, Layer]) -> dict[str, Layer]:
        for name in v:
            if not name or "/" in name or "\\" in name:
                msg = f"Layer directory must be a single path segment, got {name!r}"
                raise ValueError(msg)
        return v

    def layer_directories(self) -> dict[str, Layer]:
        """Return the effective directory name -> layer mapping."""
        return {**DEFAULT_LAYER_DIRECTORIES, **self.directories}


class LayerCheckConfig(BaseModel):
    """Configuration for a layercheck run."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".layercheck",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Python files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    external: list[str] = Field(
        default_factory=list,
        description="Module-name glob patterns exempt from the layer check",
    )
    layers: LayersConfig = Field(
        default_factory=LayersConfig,
        description="Architectural layer classification",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )


class ConfigError(LayerCheckError):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    Absolute paths, ``~`` paths and paths that escape the root after
    resolution are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    if not resolved_output.is_relative_to(resolved_root):
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg)

    return resolved_output


def load_config(root: Path, path: Path | None = None) -> LayerCheckConfig:
    """Load configuration from layercheck.toml (or ``path``) if it exists.

    An explicitly given ``path`` must exist.
    """
    config_path = path if path is not None else root / CONFIG_FILENAME

    if not config_path.is_file():
        if path is not None:
            msg = f"Config file not found: {config_path}"
            raise ConfigError(msg)
        return LayerCheckConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return LayerCheckConfig.model_validate(data)
    except ValueError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
