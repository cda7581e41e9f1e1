"""Human- and machine-readable renderings of a check report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.utils import _dump_json

if TYPE_CHECKING:
    from analysis.check import CheckReport
    from rules.validator import LayerViolation


def format_violation(violation: LayerViolation) -> str:
    location = violation.path or violation.from_module
    if violation.lines:
        location = f"{location}:{violation.lines[0]}"
    return (
        f"{location}: {violation.from_module} ({violation.from_layer.value}) -> "
        f"{violation.to_module} ({violation.to_layer.value})"
    )


def render_text(report: CheckReport) -> str:
    lines = [format_violation(violation) for violation in report.violations]
    count = len(report.violations)
    noun = "violation" if count == 1 else "violations"
    lines.append(
        f"{count} layer {noun} in {report.module_count} modules "
        f"({report.edge_count} internal imports)"
    )
    return "\n".join(lines) + "\n"


def render_json(report: CheckReport) -> bytes:
    return _dump_json(report)


__all__ = ["format_violation", "render_json", "render_text"]
