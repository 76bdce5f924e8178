"""Command line helpers for generating T-shirt pattern versions."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from garment.derived import compute_partial_derived
from garment.parameters import with_advanced_defaults
from schemas.validators import ParameterValidationError, load_payload, validate_parameters

from .pipelines.generate_version import generate_version, write_version_artifacts

__all__ = ["LOG_FORMAT", "LOG_LEVEL_ENV", "build_cli", "configure_logging", "load_parameters"]

LOG_FORMAT = "%(asctime)s - (%(name)s): [%(levelname)s] %(message)s"
LOG_LEVEL_ENV = "CADGEN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Install the CLI log format at ``level`` or ``$CADGEN_LOG_LEVEL``."""

    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, name, logging.WARNING), format=LOG_FORMAT, force=True)


def load_parameters(path: Path) -> dict[str, Any]:
    """Read a JSON or YAML parameter file and fill omitted advanced fields."""

    payload = load_payload(path)
    if not isinstance(payload, Mapping):
        raise TypeError(f"Parameter file {path} must contain a mapping.")
    return with_advanced_defaults(payload)


def _print_errors(errors: Sequence[str]) -> None:
    for error in errors:
        print(f"error: {error}", file=sys.stderr)


def _run_generate(params_path: Path, version: int, previous_path: Path | None, output: Path) -> int:
    params = load_parameters(params_path)
    previous = load_parameters(previous_path) if previous_path is not None else None
    try:
        artifacts = generate_version(params, version, previous)
    except ParameterValidationError as exc:
        _print_errors(exc.errors)
        return 1

    for warning in artifacts.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    for name, path in write_version_artifacts(artifacts, output).items():
        print(f"Wrote {name} to {path}")
    return 0


def _run_validate(params_path: Path) -> int:
    report = validate_parameters(load_parameters(params_path))
    if not report.valid:
        _print_errors(report.errors)
        return 1
    print("Parameters are valid.")
    return 0


def _run_derive(params_path: Path) -> int:
    payload = load_payload(params_path)
    if not isinstance(payload, Mapping):
        raise TypeError(f"Parameter file {params_path} must contain a mapping.")
    print(json.dumps(compute_partial_derived(payload), indent=2))
    return 0


def build_cli(argv: Sequence[str] | None = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Parametric T-shirt pattern generator")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help=f"Logging verbosity (default: ${LOG_LEVEL_ENV} or {DEFAULT_LOG_LEVEL})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate",
        help="Generate the pattern and manufacturing pack for one version",
    )
    generate.add_argument("--params", type=Path, required=True, help="JSON or YAML parameter file")
    generate.add_argument("--version", type=int, required=True, help="Version number (1 or greater)")
    generate.add_argument(
        "--previous",
        type=Path,
        help="Parameter file of the previous version (required after version 1); adds version_diff.json",
    )
    generate.add_argument(
        "--output",
        type=Path,
        default=Path("exports/tshirt"),
        help="Directory for the generated artifacts",
    )

    validate = subparsers.add_parser("validate", help="Check a parameter file and list every problem")
    validate.add_argument("--params", type=Path, required=True, help="JSON or YAML parameter file")

    derive = subparsers.add_parser("derive", help="Print derived values computable from a parameter file")
    derive.add_argument("--params", type=Path, required=True, help="JSON or YAML parameter file")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "generate":
        if args.version < 1:
            parser.error("--version must be 1 or greater")
        if args.version > 1 and args.previous is None:
            parser.error("--previous is required for versions after 1")
        return _run_generate(args.params, args.version, args.previous, args.output)

    if args.command == "validate":
        return _run_validate(args.params)

    if args.command == "derive":
        return _run_derive(args.params)

    parser.error(f"Unknown command: {args.command}")
    return 0
