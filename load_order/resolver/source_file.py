"""Source file descriptors and the per-resolution context they share."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .directives import DEFAULT_MARKERS, Directive, parse_directive
from .domains import ExecutionDomain, classify_domain
from .errors import CycleError
from .filesystem import Filesystem, LocalFilesystem

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Settings and collaborators shared by every file in one resolution run.

    A context belongs to a single run. With memoize enabled it caches file
    descriptors by path, and each descriptor keeps its parsed directives and
    finished prerequisite list. The cache dies with the context.

    Attributes:
        filesystem: Filesystem the files are read from
        markers: Extension -> directive comment marker
        root: Directory non-relative directive paths are resolved against
        expand_bulk: Expand require_tree / require_directory directives
        memoize: Reuse descriptors, directives and prerequisite lists within this run
    """

    filesystem: Filesystem = field(default_factory=LocalFilesystem)
    markers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MARKERS))
    root: Path | None = None
    expand_bulk: bool = False
    memoize: bool = False
    _files: dict[Path, SourceFile] = field(default_factory=dict, init=False, repr=False)

    def file(self, path: Path | str) -> SourceFile:
        """Get the descriptor for path (cached when memoizing)."""
        if not self.memoize:
            return SourceFile(path, self)
        key = normalize_path(path)
        cached = self._files.get(key)
        if cached is None:
            cached = SourceFile(key, self)
            self._files[key] = cached
        return cached


def normalize_path(path: Path | str) -> Path:
    """Absolute path with . and .. collapsed (symlinks are left alone)."""
    return Path(os.path.normpath(os.path.abspath(path)))


class SourceFile:
    """A file that may declare dependencies in its leading comments.

    Existence and file type are checked once, at construction. Directives
    and prerequisites are recomputed each time they are requested unless
    the context memoizes.
    """

    def __init__(self, path: Path | str, context: ResolutionContext | None = None) -> None:
        self.context = context or ResolutionContext()
        self.path = normalize_path(path)
        fs = self.context.filesystem
        self.exists = fs.exists(self.path)
        self.is_regular_file = self.exists and fs.is_file(self.path)
        self.directory = self.path.parent
        self.extension = self.path.suffix
        self.domain: ExecutionDomain = classify_domain(self.path)
        self._directives: list[Directive] | None = None
        self._prereqs: list[SourceFile] | None = None

    def __repr__(self) -> str:
        return f"SourceFile({str(self.path)!r}, domain={self.domain.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceFile):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def is_valid(self) -> bool:
        return self.exists and self.is_regular_file

    @property
    def marker(self) -> str | None:
        """Directive comment marker for this file's extension, if any."""
        return self.context.markers.get(self.extension)

    def directives(self, include_invalid: bool = False) -> list[Directive]:
        """Parse the directives at the top of the file.

        Scanning stops at the first line that does not start with the
        marker. Files whose extension has no marker are not read at all.

        Args:
            include_invalid: Also return unrecognized and malformed directives

        Returns:
            Directives in file order
        """
        parsed = self._directives
        if parsed is None:
            parsed = self._parse_directives()
            if self.context.memoize:
                self._directives = parsed
        if include_invalid:
            return list(parsed)
        return [d for d in parsed if d.is_valid]

    def _parse_directives(self) -> list[Directive]:
        marker = self.marker
        if marker is None or not self.is_valid:
            return []

        lines = self.context.filesystem.read_lines_while(
            self.path, lambda line: line.startswith(marker)
        )
        parsed: list[Directive] = []
        for line in lines:
            text = line[len(marker):].strip()
            if not text:
                continue
            parsed.append(parse_directive(self, text))
        logger.debug(f"Parsed {len(parsed)} directives from {self.path}")
        return parsed

    def prereqs(self, chain: tuple[Path, ...] = ()) -> list[SourceFile]:
        """All files this file needs, transitively, in dependency order.

        With memoize on, the list is cached once expansion finishes without
        error. A finished file cannot lead back onto a later chain, so cycle
        detection is unaffected.

        Args:
            chain: Paths currently being expanded, outermost first

        Raises:
            CycleError: If this file is already on the chain
        """
        if self.path in chain:
            start = chain.index(self.path)
            raise CycleError([*chain[start:], self.path])
        if self._prereqs is not None:
            return list(self._prereqs)
        chain = (*chain, self.path)

        result: list[SourceFile] = []
        seen: set[Path] = set()
        for directive in self.directives():
            for f in directive.to_files(chain):
                if f.path not in seen:
                    seen.add(f.path)
                    result.append(f)
        if self.context.memoize:
            self._prereqs = list(result)
        return result
