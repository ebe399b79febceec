#!/usr/bin/env python3
"""Report directive lines that the resolver silently ignores.

Usage:
    python scripts/lint_directives.py ROOT [--config PATH] [--strict]

Walks ROOT and checks the leading directive block of every file whose
extension has a directive marker. Reports:
    - unknown keywords (e.g. "requir ./a")
    - directives without a path argument (e.g. "require")
    - require_tree / require_directory while bulk expansion is disabled

Exit codes:
    0 - No findings (or findings without --strict)
    1 - Findings with --strict, or ROOT not found
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from load_order.config import get_validated_config, load_config
from load_order.resolver import (
    Directive,
    LocalFilesystem,
    ResolutionContext,
    collect_files,
)


@dataclass
class Finding:
    """One ignored directive."""

    path: Path
    text: str
    reason: str


def classify_directive(directive: Directive) -> str | None:
    """Why a directive is ignored, or None if it takes part in resolution."""
    if directive.is_valid:
        return None
    if directive.kind is None:
        return f"unknown keyword '{directive.keyword}'"
    if directive.target_path is None:
        return "missing path argument"
    # Only bulk directives with expansion switched off are left
    return f"{directive.kind.value} is not expanded (directives.expand_bulk is off)"


def lint_tree(root: Path, context: ResolutionContext) -> list[Finding]:
    """Collect findings for every directive-bearing file under root."""
    findings: list[Finding] = []
    names = context.filesystem.list_deep(root)
    for source in collect_files(root, names, context):
        if source.marker is None:
            continue
        for directive in source.directives(include_invalid=True):
            reason = classify_directive(directive)
            if reason is not None:
                findings.append(Finding(source.path, directive.raw_text, reason))
    return findings


def main() -> int:
    parser = argparse.ArgumentParser(description="Lint load order directives")
    parser.add_argument("root", help="Directory to scan")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with error code on findings (default: warn only)",
    )
    args = parser.parse_args()

    root = Path(args.root).resolve()
    if not root.is_dir():
        print(f"Directory not found: {root}")
        return 1

    load_config(args.config)
    config = get_validated_config()
    context = ResolutionContext(
        filesystem=LocalFilesystem(ignore_hidden=config.listing.ignore_hidden),
        markers=config.directives.markers,
        root=root,
        expand_bulk=config.directives.expand_bulk,
    )

    findings = lint_tree(root, context)
    if not findings:
        print("Directive lint passed.")
        return 0

    print("=" * 60)
    print("IGNORED DIRECTIVES")
    print("=" * 60)
    print()

    for f in findings:
        print(f"  {f.path.relative_to(root)}")
        print(f"    {f.text}")
        print(f"    -> {f.reason}")
        print()

    print("=" * 60)
    print(f"{len(findings)} directive(s) will not affect load order.")
    print("=" * 60)

    return 1 if args.strict else 0


if __name__ == "__main__":
    sys.exit(main())
