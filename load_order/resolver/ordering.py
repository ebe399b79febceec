"""Domain partitioning and depth sorting.

These functions only arrange files; they never look at directives. The
depth sort gives every domain a stable base order (deepest directories
first) that dependency expansion then adjusts.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from .domains import ExecutionDomain

if TYPE_CHECKING:
    from .source_file import ResolutionContext, SourceFile


def collect_files(
    directory: Path,
    names: Iterable[str],
    context: ResolutionContext,
) -> list[SourceFile]:
    """Build descriptors for listing entries that are real files with extensions.

    Args:
        directory: Directory the names are relative to
        names: Entries from a shallow or deep listing of directory
        context: Resolution context the descriptors belong to

    Returns:
        Valid files, in listing order
    """
    files: list[SourceFile] = []
    for name in names:
        if not Path(name).suffix:
            continue
        source = context.file(directory / name)
        if source.is_valid:
            files.append(source)
    return files


def partition_by_domain(files: Iterable[SourceFile]) -> dict[ExecutionDomain, list[SourceFile]]:
    """Group files by execution domain. Every domain gets a (possibly empty) list."""
    groups: dict[ExecutionDomain, list[SourceFile]] = {d: [] for d in ExecutionDomain}
    for f in files:
        groups[f.domain].append(f)
    return groups


def depth_sort(files: Iterable[SourceFile]) -> list[SourceFile]:
    """Order files by directory depth, deepest directories first.

    Files keep their relative order within a directory, and directories of
    equal depth keep the order they were first seen in.
    """
    by_directory: dict[Path, list[SourceFile]] = {}
    for f in files:
        by_directory.setdefault(f.directory, []).append(f)

    directories = sorted(by_directory, key=lambda d: len(d.parts), reverse=True)
    return [f for directory in directories for f in by_directory[directory]]
