"""Validation helpers for generated artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from analysis.check import CheckReport
from artifacts.models import ModuleRecord
from contract.artifacts import ARTIFACT_SCHEMA_VERSION, ARTIFACT_SPECS

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error(
        self, artifact: str, path: Path, message: str, line: int | None = None
    ) -> None:
        self.errors.append(ValidationMessage(artifact, path, message, line))


def validate_artifacts(artifacts_dir: Path) -> ValidationResult:
    """Check that every artifact exists and matches its schema.

    Problems are collected into the result rather than raised.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.error("artifacts_dir", artifacts_dir, "Artifacts directory does not exist.")
        return result

    if not artifacts_dir.is_dir():
        result.error("artifacts_dir", artifacts_dir, "Artifacts path is not a directory.")
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.error(artifact_name, path, "Required artifact file is missing.")
            continue

        if spec.format == "jsonl":
            _validate_modules_jsonl(artifact_name, path, result)
        elif spec.format == "json":
            _validate_layer_check(artifact_name, path, result)
        elif spec.format == "edgelist":
            _validate_edgelist(artifact_name, path, result)
        else:
            result.error(
                artifact_name, path, f"Unsupported artifact format: {spec.format}."
            )

    return result


def _validate_modules_jsonl(
    artifact_name: str, path: Path, result: ValidationResult
) -> None:
    try:
        raw_lines = path.read_bytes().splitlines()
    except OSError as exc:
        result.error(artifact_name, path, f"Failed to read file: {exc}.")
        return

    version_reported = False
    for line_number, raw_line in enumerate(raw_lines, 1):
        line = raw_line.strip()
        if not line:
            continue
        try:
            record = ModuleRecord.model_validate(orjson.loads(line))
        except orjson.JSONDecodeError as exc:
            result.error(artifact_name, path, f"Invalid JSON: {exc}.", line_number)
            continue
        except ValidationError as exc:
            result.error(
                artifact_name, path, f"Schema validation failed: {exc}.", line_number
            )
            continue

        if record.schema_version != ARTIFACT_SCHEMA_VERSION and not version_reported:
            result.error(
                artifact_name,
                path,
                _version_mismatch(record.schema_version),
                line_number,
            )
            version_reported = True


def _validate_layer_check(
    artifact_name: str, path: Path, result: ValidationResult
) -> None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.error(artifact_name, path, f"Invalid JSON: {exc}.")
        return

    if not isinstance(raw, dict):
        result.error(artifact_name, path, "Expected JSON object for layer_check.json.")
        return

    try:
        report = CheckReport.model_validate(raw)
    except ValidationError as exc:
        result.error(artifact_name, path, f"Schema validation failed: {exc}.")
        return

    if report.schema_version != ARTIFACT_SCHEMA_VERSION:
        result.error(artifact_name, path, _version_mismatch(report.schema_version))


def _validate_edgelist(
    artifact_name: str, path: Path, result: ValidationResult
) -> None:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as exc:
        result.error(
            artifact_name, path, f"Failed to read file: invalid UTF-8 ({exc})."
        )
        return
    except OSError as exc:
        result.error(artifact_name, path, f"Failed to read file: {exc}.")
        return

    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line:
            continue
        source, sep, target = line.partition("->")
        if not sep:
            result.error(
                artifact_name,
                path,
                "Malformed edgelist line (expected 'source -> target').",
                line_number,
            )
        elif not source.strip() or not target.strip():
            result.error(
                artifact_name,
                path,
                "Malformed edgelist line (empty source or target).",
                line_number,
            )


def _version_mismatch(found: int) -> str:
    return f"Schema version mismatch: expected {ARTIFACT_SCHEMA_VERSION}, got {found}."


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
