"""Filesystem access used by the resolver.

The resolver only ever needs five read-only capabilities: existence checks,
file-type checks, shallow and deep directory listings, and reading the
leading lines of a file. They are described by the Filesystem protocol so
tests (or other callers) can substitute their own implementation.

Listings are sorted so that resolution order never depends on the order the
operating system happens to return directory entries in.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

LinePredicate = Callable[[str], bool]


class Filesystem(Protocol):
    """Read-only filesystem capabilities consumed by the resolver."""

    def exists(self, path: Path) -> bool:
        """Whether anything exists at path."""
        ...

    def is_file(self, path: Path) -> bool:
        """Whether path is a regular file. Only meaningful if it exists."""
        ...

    def list_shallow(self, directory: Path) -> list[str]:
        """Names of the immediate children of directory."""
        ...

    def list_deep(self, directory: Path) -> list[str]:
        """Relative paths of every file and directory below directory."""
        ...

    def read_lines_while(self, path: Path, predicate: LinePredicate) -> list[str]:
        """Leading lines of path, stopping at the first that fails predicate."""
        ...


class LocalFilesystem:
    """Filesystem implementation backed by the local disk."""

    def __init__(self, ignore_hidden: bool = False) -> None:
        """Initialize the filesystem.

        Args:
            ignore_hidden: Skip entries whose name starts with "." in listings
        """
        self.ignore_hidden = ignore_hidden

    def _visible(self, name: str) -> bool:
        return not (self.ignore_hidden and name.startswith("."))

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def list_shallow(self, directory: Path) -> list[str]:
        names = sorted(os.listdir(directory))
        return [name for name in names if self._visible(name)]

    def list_deep(self, directory: Path) -> list[str]:
        entries: list[str] = []
        for current, dirnames, filenames in os.walk(directory):
            # Prune in place so os.walk skips hidden dirs and descends in order
            dirnames[:] = sorted(d for d in dirnames if self._visible(d))
            rel = os.path.relpath(current, directory)
            children = sorted(dirnames + [f for f in filenames if self._visible(f)])
            for name in children:
                entries.append(name if rel == "." else os.path.join(rel, name))
        logger.debug(f"Listed {len(entries)} entries under {directory}")
        return entries

    def read_lines_while(self, path: Path, predicate: LinePredicate) -> list[str]:
        lines: list[str] = []
        with open(path, encoding="utf-8", errors="replace") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                if not predicate(line):
                    break
                lines.append(line)
        return lines
