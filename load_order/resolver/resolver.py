"""Load order resolution.

Turns a directory listing into one ordered file sequence per execution
domain. Every file comes after the files it requires, no file appears
twice, and files with no dependency between them keep the depth-sorted
base order.

Usage:
    from load_order.resolver import Resolver

    resolver = Resolver()
    result = resolver.resolve_directory_tree("app")
    for path in result.client:
        print(path)

Any ResolutionError aborts the whole run; there is no partial result.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from .directives import DEFAULT_MARKERS
from .domains import ExecutionDomain
from .errors import InvalidFileError, MissingFileError
from .filesystem import Filesystem, LocalFilesystem
from .ordering import collect_files, depth_sort, partition_by_domain
from .source_file import ResolutionContext, SourceFile, normalize_path

if TYPE_CHECKING:
    from ..config_schema import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Ordered paths for each execution domain."""

    client: list[Path] = field(default_factory=list)
    server: list[Path] = field(default_factory=list)
    shared: list[Path] = field(default_factory=list)

    def for_domain(self, domain: ExecutionDomain | str) -> list[Path]:
        """Ordered paths for one domain."""
        return getattr(self, ExecutionDomain(domain).value)

    def to_dict(self, relative_to: Path | None = None) -> dict[str, list[str]]:
        """Convert to a JSON-friendly dict, optionally with paths relative to a directory."""
        result: dict[str, list[str]] = {}
        for domain in ExecutionDomain:
            paths = self.for_domain(domain)
            if relative_to is not None:
                result[domain.value] = [os.path.relpath(p, relative_to) for p in paths]
            else:
                result[domain.value] = [str(p) for p in paths]
        return result


def resolve_files(files: Iterable[SourceFile]) -> list[SourceFile]:
    """Expand prerequisites of depth-sorted files into a deduplicated order.

    Each file's prerequisites are emitted (if not already present) before
    the file itself.
    """
    ordered: list[SourceFile] = []
    seen: set[Path] = set()
    for f in files:
        for prereq in f.prereqs():
            if prereq.path not in seen:
                seen.add(prereq.path)
                ordered.append(prereq)
        if f.path not in seen:
            seen.add(f.path)
            ordered.append(f)
    return ordered


class Resolver:
    """Resolves load order for a directory tree or a single directory.

    Each call runs against a fresh ResolutionContext, so nothing read during
    one resolution leaks into the next.
    """

    def __init__(
        self,
        filesystem: Filesystem | None = None,
        markers: dict[str, str] | None = None,
        expand_bulk: bool = False,
        memoize: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            filesystem: Filesystem to read from. Defaults to the local disk.
            markers: Extension -> directive comment marker. Defaults to
                DEFAULT_MARKERS.
            expand_bulk: Expand require_tree and require_directory directives
            memoize: Cache file descriptors, directives and prerequisite lists
                within a run
        """
        self.filesystem: Filesystem = filesystem or LocalFilesystem()
        self.markers = dict(markers) if markers is not None else dict(DEFAULT_MARKERS)
        self.expand_bulk = expand_bulk
        self.memoize = memoize

    @classmethod
    def from_config(cls, config: AppConfig, filesystem: Filesystem | None = None) -> Resolver:
        """Create a resolver from validated configuration."""
        return cls(
            filesystem=filesystem or LocalFilesystem(ignore_hidden=config.listing.ignore_hidden),
            markers=config.directives.markers,
            expand_bulk=config.directives.expand_bulk,
            memoize=config.resolver.memoize,
        )

    def new_context(self, root: Path | None = None) -> ResolutionContext:
        """Create the context for one resolution run."""
        return ResolutionContext(
            filesystem=self.filesystem,
            markers=self.markers,
            root=root,
            expand_bulk=self.expand_bulk,
            memoize=self.memoize,
        )

    def resolve_directory_tree(self, root: Path | str) -> ResolutionResult:
        """Resolve every file below root (recursive listing)."""
        directory = self._check_directory(root)
        names = self.filesystem.list_deep(directory)
        return self._resolve(directory, names)

    def resolve_directory(self, directory: Path | str) -> ResolutionResult:
        """Resolve only the files directly inside directory."""
        checked = self._check_directory(directory)
        names = self.filesystem.list_shallow(checked)
        return self._resolve(checked, names)

    def _check_directory(self, directory: Path | str) -> Path:
        path = normalize_path(directory)
        if not self.filesystem.exists(path):
            raise MissingFileError(path)
        if self.filesystem.is_file(path):
            raise InvalidFileError(path, expected="a directory")
        return path

    def _resolve(self, directory: Path, names: list[str]) -> ResolutionResult:
        context = self.new_context(root=directory)
        files = collect_files(directory, names, context)
        logger.info(f"Resolving {len(files)} files from {len(names)} entries under {directory}")

        result = ResolutionResult()
        for domain, group in partition_by_domain(files).items():
            ordered = resolve_files(depth_sort(group))
            result.for_domain(domain).extend(f.path for f in ordered)
            logger.info(f"Resolved {domain.value}: {len(ordered)} files")
        return result


def resolve_directory_tree(root_dir: Path | str, **options: Any) -> ResolutionResult:
    """Resolve every file below root_dir with a default Resolver.

    Keyword options are passed to Resolver.
    """
    return Resolver(**options).resolve_directory_tree(root_dir)


def resolve_directory(directory: Path | str, **options: Any) -> ResolutionResult:
    """Resolve the files directly inside directory with a default Resolver."""
    return Resolver(**options).resolve_directory(directory)
