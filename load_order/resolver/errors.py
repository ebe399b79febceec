"""Resolution errors raised while expanding require directives.

Every error here is fatal to the resolution that raised it: there is no
partial result. Errors carry a machine-readable code so callers (and the
JSON output of run.py) can switch on the failure kind.

Usage:
    from load_order.resolver.errors import ResolutionError, ErrorCode

    try:
        result = resolve_directory_tree(root)
    except ResolutionError as e:
        if e.code == ErrorCode.CYCLE:
            ...
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    MISSING_FILE = "missing_file"
    INVALID_FILE = "invalid_file"
    DOMAIN_MISMATCH = "domain_mismatch"
    CYCLE = "cycle"


class ResolutionError(Exception):
    """Base class for all resolution failures.

    Attributes:
        code: Machine-readable error code
        path: The file the failure is about
        required_by: The file whose directive led to the failure, if known
    """

    code: ErrorCode

    def __init__(self, message: str, path: Path, required_by: Path | None = None) -> None:
        self.path = path
        self.required_by = required_by
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "error": str(self),
            "code": self.code.value,
            "path": str(self.path),
        }
        if self.required_by is not None:
            result["required_by"] = str(self.required_by)
        return result


class MissingFileError(ResolutionError):
    """Raised when a require target does not exist."""

    code = ErrorCode.MISSING_FILE

    def __init__(self, path: Path, required_by: Path | None = None) -> None:
        where = f" (required by {required_by})" if required_by else ""
        super().__init__(f"Required file not found: {path}{where}", path, required_by)


class InvalidFileError(ResolutionError):
    """Raised when a require target exists but has the wrong file type."""

    code = ErrorCode.INVALID_FILE

    def __init__(
        self,
        path: Path,
        required_by: Path | None = None,
        expected: str = "a regular file",
    ) -> None:
        self.expected = expected
        where = f" (required by {required_by})" if required_by else ""
        super().__init__(f"Required path is not {expected}: {path}{where}", path, required_by)


class DomainMismatchError(ResolutionError):
    """Raised when a file requires a file from another execution domain."""

    code = ErrorCode.DOMAIN_MISMATCH

    def __init__(
        self,
        path: Path,
        required_by: Path,
        target_domain: str,
        owner_domain: str,
    ) -> None:
        self.target_domain = target_domain
        self.owner_domain = owner_domain
        super().__init__(
            f"Domain mismatch: {required_by} ({owner_domain}) "
            f"cannot require {path} ({target_domain})",
            path,
            required_by,
        )

    def to_dict(self) -> dict[str, object]:
        result = super().to_dict()
        result["target_domain"] = self.target_domain
        result["owner_domain"] = self.owner_domain
        return result


class CycleError(ResolutionError):
    """Raised when a prerequisite chain comes back to a file still being expanded.

    Attributes:
        cycle: The chain of paths, starting and ending with the repeated file
    """

    code = ErrorCode.CYCLE

    def __init__(self, cycle: list[Path]) -> None:
        self.cycle = cycle
        chain = " -> ".join(str(p) for p in cycle)
        required_by = cycle[-2] if len(cycle) > 1 else None
        super().__init__(f"Dependency cycle: {chain}", cycle[-1], required_by)

    def to_dict(self) -> dict[str, object]:
        result = super().to_dict()
        result["cycle"] = [str(p) for p in self.cycle]
        return result
