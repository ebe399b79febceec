"""Directive parsing and expansion.

Directives are dependency declarations written in a file's leading comment
lines, one per line, using a comment marker chosen by file extension:

    //= require ./util
    //= require ../lib/format.js
    //= require_tree ./widgets

The text after the marker is split into a keyword and a path argument. Only
well-formed require directives take part in resolution; anything else is
silently ignored. require_tree and require_directory are recognized but only
expanded when bulk expansion is enabled.

Expansion (Directive.to_files) walks prerequisites depth-first so that every
file comes after the files it needs. The chain of files currently being
expanded is threaded through the walk; meeting a file already on the chain
raises CycleError instead of recursing forever.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import DomainMismatchError, InvalidFileError, MissingFileError
from .ordering import collect_files, depth_sort

if TYPE_CHECKING:
    from .source_file import SourceFile

logger = logging.getLogger(__name__)

# Extension -> comment marker that introduces a directive line
DEFAULT_MARKERS: dict[str, str] = {
    ".js": "//=",
    ".coffee": "#=",
}

# Marks a path argument as relative to the requiring file's directory
RELATIVE_MARKER = "."


class DirectiveKind(str, Enum):
    """Recognized directive keywords."""

    REQUIRE = "require"
    REQUIRE_TREE = "require_tree"
    REQUIRE_DIRECTORY = "require_directory"


BULK_KINDS = frozenset({DirectiveKind.REQUIRE_TREE, DirectiveKind.REQUIRE_DIRECTORY})

_KINDS_BY_KEYWORD: dict[str, DirectiveKind] = {k.value: k for k in DirectiveKind}


@dataclass
class Directive:
    """One dependency declaration parsed from a file's leading comments.

    Attributes:
        owner: The file the directive was found in (read-only back-reference)
        raw_text: Directive line with the comment marker stripped and trimmed
        keyword: First word of raw_text
        kind: Recognized directive kind, or None if the keyword is unknown
        argument: Path argument as written (may be empty)
        target_path: Absolute path the argument refers to, or None if blank
    """

    owner: SourceFile = field(repr=False, compare=False)
    raw_text: str
    keyword: str
    kind: DirectiveKind | None
    argument: str
    target_path: Path | None

    @property
    def is_valid(self) -> bool:
        """Whether this directive contributes files during expansion."""
        if self.target_path is None:
            return False
        if self.kind is DirectiveKind.REQUIRE:
            return True
        return self.kind in BULK_KINDS and self.owner.context.expand_bulk

    def to_files(self, chain: tuple[Path, ...] = ()) -> list[SourceFile]:
        """Expand this directive into files, each preceded by its prerequisites.

        Args:
            chain: Paths currently being expanded, outermost first

        Returns:
            Files in dependency order. May contain duplicates; callers dedupe.

        Raises:
            MissingFileError: If the target does not exist
            InvalidFileError: If the target has the wrong file type
            DomainMismatchError: If a target file is in another domain
            CycleError: If a target leads back to a file on the chain
        """
        if not self.is_valid or self.target_path is None:
            return []

        target = self.owner.context.file(self.target_path)
        if not target.exists:
            raise MissingFileError(target.path, self.owner.path)

        if self.kind is DirectiveKind.REQUIRE:
            if not target.is_regular_file:
                raise InvalidFileError(target.path, self.owner.path)
            return self._expand_file(target, chain)

        if target.is_regular_file:
            raise InvalidFileError(target.path, self.owner.path, expected="a directory")
        return self._expand_directory(target.path, chain)

    def _expand_file(self, target: SourceFile, chain: tuple[Path, ...]) -> list[SourceFile]:
        if target.domain != self.owner.domain:
            raise DomainMismatchError(
                target.path,
                self.owner.path,
                target.domain.value,
                self.owner.domain.value,
            )
        files = target.prereqs(chain)
        files.append(target)
        return files

    def _expand_directory(self, directory: Path, chain: tuple[Path, ...]) -> list[SourceFile]:
        context = self.owner.context
        fs = context.filesystem
        if self.kind is DirectiveKind.REQUIRE_TREE:
            names = fs.list_deep(directory)
        else:
            names = fs.list_shallow(directory)

        candidates = [
            f for f in collect_files(directory, names, context)
            if f.path != self.owner.path
        ]
        logger.debug(
            f"{self.keyword} {directory} matched {len(candidates)} files "
            f"for {self.owner.path}"
        )

        files: list[SourceFile] = []
        for candidate in depth_sort(candidates):
            files.extend(self._expand_file(candidate, chain))
        return files


def resolve_target(owner: SourceFile, kind: DirectiveKind | None, argument: str) -> Path:
    """Turn a directive's path argument into an absolute path.

    "./x" and "../x" are relative to the owner's directory, absolute paths
    are kept, and anything else is relative to the resolution root (or the
    working directory when there is no root). A require target that does not
    exist as written and does not already end in the owner's extension gets
    that extension appended, so "./jquery.min" finds "jquery.min.js".
    """
    if argument.startswith(RELATIVE_MARKER):
        joined = owner.directory / argument
    elif os.path.isabs(argument):
        joined = Path(argument)
    elif owner.context.root is not None:
        joined = owner.context.root / argument
    else:
        joined = Path.cwd() / argument

    target = Path(os.path.normpath(joined))
    if (
        kind is DirectiveKind.REQUIRE
        and owner.extension
        and target.suffix != owner.extension
        and not owner.context.filesystem.exists(target)
    ):
        target = target.with_name(target.name + owner.extension)
    return target


def parse_directive(owner: SourceFile, raw_text: str) -> Directive:
    """Parse directive text (marker already stripped) into a Directive."""
    parts = raw_text.split(None, 1)
    keyword = parts[0] if parts else ""
    argument = parts[1].strip() if len(parts) > 1 else ""
    kind = _KINDS_BY_KEYWORD.get(keyword)

    target_path = resolve_target(owner, kind, argument) if argument else None
    directive = Directive(
        owner=owner,
        raw_text=raw_text,
        keyword=keyword,
        kind=kind,
        argument=argument,
        target_path=target_path,
    )
    if not directive.is_valid:
        logger.debug(f"Ignoring directive '{raw_text}' in {owner.path}")
    return directive
