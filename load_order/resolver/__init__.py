# Load order resolver package
from .domains import ExecutionDomain, classify_domain
from .errors import (
    ErrorCode, ResolutionError, MissingFileError, InvalidFileError,
    DomainMismatchError, CycleError,
)
from .filesystem import Filesystem, LocalFilesystem
from .directives import (
    DEFAULT_MARKERS, Directive, DirectiveKind, parse_directive, resolve_target,
)
from .source_file import ResolutionContext, SourceFile
from .ordering import collect_files, depth_sort, partition_by_domain
from .resolver import (
    Resolver, ResolutionResult, resolve_files,
    resolve_directory, resolve_directory_tree,
)

__all__ = [
    "ExecutionDomain", "classify_domain",
    "ErrorCode", "ResolutionError", "MissingFileError", "InvalidFileError",
    "DomainMismatchError", "CycleError",
    "Filesystem", "LocalFilesystem",
    "DEFAULT_MARKERS", "Directive", "DirectiveKind", "parse_directive", "resolve_target",
    "ResolutionContext", "SourceFile",
    "collect_files", "depth_sort", "partition_by_domain",
    "Resolver", "ResolutionResult", "resolve_files",
    "resolve_directory", "resolve_directory_tree",
]
