"""Command-line interface for layercheck."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from analysis.check import check_repository
from artifacts.write import write_check_artifacts
from contract.validation import validate_artifacts
from log_config import configure_logging
from report.render import render_json, render_text
from rules.config import load_config
from rules.errors import LayerCheckError
from verify.verify import verify_determinism

if TYPE_CHECKING:
    from rules.config import LayerCheckConfig

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a layercheck.toml (default: <root>/layercheck.toml)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="layercheck")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--log-json", action="store_true", help="Emit logs as JSON lines"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Report imports that point to an outer layer"
    )
    _add_common_arguments(check_parser)
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )

    generate_parser = subparsers.add_parser("generate", help="Generate artifacts")
    _add_common_arguments(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_arguments(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_arguments(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _config_path(config: str | None) -> Path | None:
    if config is None:
        return None
    return Path(config).expanduser().resolve()


def _resolve_artifacts_dir(
    root: Path, artifacts_dir: str | None, config: LayerCheckConfig
) -> Path:
    if artifacts_dir is None:
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _handle_check(root: Path, args: argparse.Namespace) -> int:
    config = load_config(root, _config_path(args.config))
    report = check_repository(root, config)
    if args.format == "json":
        sys.stdout.write(render_json(report).decode("utf-8"))
    else:
        sys.stdout.write(render_text(report))
    return EXIT_OK if report.ok else EXIT_FAILED


def _handle_generate(root: Path, args: argparse.Namespace) -> int:
    config = load_config(root, _config_path(args.config))
    out_dir = None
    if args.out_dir is not None:
        out_dir = Path(args.out_dir).expanduser().resolve()
    write_check_artifacts(root=root, out_dir=out_dir, config=config)
    return EXIT_OK


def _handle_validate(root: Path, args: argparse.Namespace) -> int:
    config = load_config(root, _config_path(args.config))
    resolved_artifacts_dir = _resolve_artifacts_dir(root, args.artifacts_dir, config)
    result = validate_artifacts(resolved_artifacts_dir)
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return EXIT_FAILED
    return EXIT_OK


def _handle_verify(root: Path, args: argparse.Namespace) -> int:
    config = load_config(root, _config_path(args.config))
    resolved_artifacts_dir = _resolve_artifacts_dir(root, args.artifacts_dir, config)
    try:
        result = verify_determinism(
            root=root, artifacts_dir=resolved_artifacts_dir, config=config
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return EXIT_FAILED
    return EXIT_OK


_HANDLERS = {
    "check": _handle_check,
    "generate": _handle_generate,
    "validate": _handle_validate,
    "verify": _handle_verify,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, log_json=args.log_json)

    root = Path(args.root).expanduser().resolve()

    try:
        return _HANDLERS[args.command](root, args)
    except LayerCheckError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
