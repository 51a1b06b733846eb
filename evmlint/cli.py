#!/usr/bin/env python3
"""
CLI entrypoint for evmlint.

Usage:
    evmlint report build/contracts/*.json --results results.json
    evmlint report Token.json --results results.json --space-limited -o out.json
    evmlint init [DIR]                     # write a default .evmlint.yml

The results file maps contract names to the list of scanner results
returned for that contract.

Returns:
    0: no error-severity issues
    1: at least one error-severity issue
    3: Error (bad input, unreadable file)
"""

from __future__ import annotations

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .artifact import ContractArtifact, load_build_file, missing_contracts
from .config import EvmLintConfig
from .errors import ArtifactError
from .events import logging_sink
from .pipeline import AnalysisUnit, analyze_batch

logger = logging.getLogger("evmlint")


def format_versions(versions: dict[str, str]) -> str:
    """``{"solc": "0.5.0", "api": "1.0.0"}`` → ``"api: 1.0.0, solc: 0.5.0"``."""
    return ", ".join(f"{k}: {versions[k]}" for k in sorted(versions))


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _apply_config_defaults(args: argparse.Namespace) -> None:
    """Fill flags not given on the command line from .evmlint.yml."""
    root = args.config.parent if args.config else Path.cwd()
    cfg = EvmLintConfig.load(root)

    if not args.space_limited and cfg.report.space_limited:
        args.space_limited = True
    if not args.debug and cfg.report.debug:
        args.debug = True
    if not args.strict and cfg.report.strict:
        args.strict = True
    if not args.contract and cfg.scan.contracts:
        args.contract = list(cfg.scan.contracts)


# ── Subcommand handlers ─────────────────────────────────────────────────────

def _load_results(path: Path) -> dict[str, list[dict[str, Any]]]:
    with open(path) as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected an object mapping contract names to results")
    return {name: list(results or []) for name, results in raw.items()}


def _handle_report(args: argparse.Namespace) -> int:
    """Handle ``evmlint report``."""
    _apply_config_defaults(args)
    _setup_logging(args.debug)
    sink = logging_sink(logger)

    try:
        results = _load_results(args.results)
        artifacts = [
            ContractArtifact.from_build_json(load_build_file(p), sink)
            for p in args.builds
        ]
    except (OSError, ValueError, ArtifactError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 3

    for name in missing_contracts(artifacts, args.contract):
        logger.warning("Contract %s not found in build files", name)
    if args.contract:
        artifacts = [a for a in artifacts if a.contract_name in args.contract]

    units = [AnalysisUnit(a, results.get(a.contract_name, [])) for a in artifacts]
    batch = analyze_batch(
        units,
        space_limited=args.space_limited,
        strict=args.strict,
        on_event=sink,
    )
    for failure in batch.errors:
        print(f"Error: {failure.contract_name} could not be analyzed: {failure.reason}", file=sys.stderr)

    text = json.dumps(batch.to_dict(), indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n")
    else:
        print(text)
    return 1 if batch.error_count else 0


def _handle_init(args: argparse.Namespace) -> int:
    """Handle ``evmlint init``."""
    target = args.root / ".evmlint.yml"
    if target.exists() and not args.overwrite:
        print(f"{target} already exists (use --overwrite)", file=sys.stderr)
        return 3
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(EvmLintConfig().to_yaml())
    print(f"Wrote {target}")
    return 0


# ── Main entry point ────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="evmlint",
        description="evmlint: resolve EVM scanner findings to ESLint-style reports",
    )
    parser.add_argument(
        "--version", action="version",
        version=format_versions({"evmlint": __version__, "python": platform.python_version()}),
    )
    subparsers = parser.add_subparsers(dest="command")

    # ── report subcommand ────────────────────────────────────────────────
    report_parser = subparsers.add_parser(
        "report",
        help="Normalize scanner results against build artifacts",
    )
    report_parser.add_argument("builds", type=Path, nargs="+", help="Truffle build JSON files")
    report_parser.add_argument(
        "--results", type=Path, required=True,
        help="JSON object mapping contract names to scanner results",
    )
    report_parser.add_argument("-o", "--output", type=Path, help="Write JSON here instead of stdout")
    report_parser.add_argument("--space-limited", action="store_true", help="Only emit short issue descriptions")
    report_parser.add_argument("--debug", action="store_true", help="Log suppressed issues and dropped fields")
    report_parser.add_argument(
        "--strict", action="store_true",
        help="Fail an artifact on source-map inconsistencies instead of reporting unknown locations",
    )
    report_parser.add_argument(
        "--contract", action="append", default=[],
        help="Only report on this contract (repeatable)",
    )
    report_parser.add_argument("--config", type=Path, help="Path to .evmlint.yml")

    # ── init subcommand ──────────────────────────────────────────────────
    init_parser = subparsers.add_parser("init", help="Write a default .evmlint.yml")
    init_parser.add_argument("root", type=Path, nargs="?", default=Path("."))
    init_parser.add_argument("--overwrite", action="store_true")

    args = parser.parse_args(argv)
    if args.command == "report":
        return _handle_report(args)
    if args.command == "init":
        return _handle_init(args)
    parser.print_help()
    return 3


if __name__ == "__main__":
    sys.exit(main())
