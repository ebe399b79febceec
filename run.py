#!/usr/bin/env python3
"""
load_order - Main runner script

Usage:
    python run.py app                  # Resolve every file below app/
    python run.py app --shallow        # Only files directly inside app/
    python run.py app --domain client  # Print a single domain
    python run.py app --json           # JSON object keyed by domain

Exit codes:
    0 - Resolved
    1 - Resolution failed (missing file, wrong file type, domain mismatch, cycle)
    2 - Root directory not found
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables (LOAD_ORDER_CONFIG may come from .env)
load_dotenv()

from load_order.config import get_validated_config, load_config, set_config_value
from load_order.config_schema import AppConfig
from load_order.resolver import ExecutionDomain, ResolutionError, ResolutionResult, Resolver

logger = logging.getLogger("load_order.run")


def configure_logging(config: AppConfig, verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging from config, with CLI overrides."""
    level = config.logging.level
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    logging.basicConfig(level=level, format=config.logging.format)
    logging.getLogger().setLevel(level)


def format_text(
    result: ResolutionResult,
    root: Path,
    domains: list[ExecutionDomain],
    relative: bool,
) -> str:
    """Render a result as one block per domain."""
    data = result.to_dict(relative_to=root if relative else None)
    blocks: list[str] = []
    for domain in domains:
        lines = [f"[{domain.value}]"]
        lines.extend(f"  {path}" for path in data[domain.value])
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def format_json(
    result: ResolutionResult,
    root: Path,
    domains: list[ExecutionDomain],
    relative: bool,
) -> str:
    """Render a result as a JSON object keyed by domain."""
    data = result.to_dict(relative_to=root if relative else None)
    return json.dumps({d.value: data[d.value] for d in domains}, indent=2)


def main(argv: list[str] | None = None) -> int:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Resolve load order for directive-annotated source files"
    )
    parser.add_argument("root", help="Directory to resolve")
    parser.add_argument(
        "--config", default=None, help="Path to config file (default: config/config.yaml)"
    )
    parser.add_argument(
        "--shallow",
        action="store_true",
        help="Only resolve files directly inside root (no recursion)",
    )
    parser.add_argument(
        "--domain",
        choices=[d.value for d in ExecutionDomain],
        help="Only print this domain",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON")
    parser.add_argument(
        "--absolute", action="store_true", help="Print absolute paths"
    )
    parser.add_argument(
        "--expand-bulk",
        action="store_true",
        help="Expand require_tree and require_directory directives",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors")
    args: argparse.Namespace = parser.parse_args(argv)

    load_config(args.config)
    if args.json:
        set_config_value("output.format", "json")
    if args.absolute:
        set_config_value("output.relative_paths", False)
    if args.expand_bulk:
        set_config_value("directives.expand_bulk", True)
    config = get_validated_config()
    configure_logging(config, verbose=args.verbose, quiet=args.quiet)

    root = Path(args.root)
    if not root.is_dir():
        print(f"Directory not found: {root}", file=sys.stderr)
        return 2
    root = root.resolve()

    resolver = Resolver.from_config(config)
    try:
        if args.shallow:
            result = resolver.resolve_directory(root)
        else:
            result = resolver.resolve_directory_tree(root)
    except ResolutionError as e:
        logger.error(f"Resolution failed: {e}")
        if config.output.format == "json":
            print(json.dumps(e.to_dict(), indent=2))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1

    domains = [ExecutionDomain(args.domain)] if args.domain else list(ExecutionDomain)
    relative = config.output.relative_paths
    if config.output.format == "json":
        print(format_json(result, root, domains, relative))
    else:
        print(format_text(result, root, domains, relative))
    return 0


if __name__ == "__main__":
    sys.exit(main())
