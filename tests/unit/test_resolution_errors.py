"""Unit tests for resolution errors."""

from pathlib import Path

import pytest

from load_order.resolver.errors import (
    CycleError,
    DomainMismatchError,
    ErrorCode,
    InvalidFileError,
    MissingFileError,
    ResolutionError,
)


class TestErrorCodes:
    """Tests for ErrorCode values and error subclasses."""

    def test_error_code_values(self) -> None:
        """All error codes have string values."""
        assert ErrorCode.MISSING_FILE.value == "missing_file"
        assert ErrorCode.INVALID_FILE.value == "invalid_file"
        assert ErrorCode.DOMAIN_MISMATCH.value == "domain_mismatch"
        assert ErrorCode.CYCLE.value == "cycle"

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (MissingFileError(Path("/a.js")), ErrorCode.MISSING_FILE),
            (InvalidFileError(Path("/a.js")), ErrorCode.INVALID_FILE),
            (
                DomainMismatchError(Path("/server/b.js"), Path("/client/a.js"), "server", "client"),
                ErrorCode.DOMAIN_MISMATCH,
            ),
            (CycleError([Path("/a.js"), Path("/b.js"), Path("/a.js")]), ErrorCode.CYCLE),
        ],
    )
    def test_all_errors_are_resolution_errors(self, error: ResolutionError, code: ErrorCode) -> None:
        """Every error kind derives from ResolutionError and carries its code."""
        assert isinstance(error, ResolutionError)
        assert error.code == code


class TestErrorMessages:
    """Tests for messages and serialization."""

    def test_missing_file_mentions_requirer(self) -> None:
        """MissingFileError names both the target and the requiring file."""
        error = MissingFileError(Path("/p/missing.js"), Path("/p/app.js"))
        assert "/p/missing.js" in str(error)
        assert "/p/app.js" in str(error)
        assert error.to_dict() == {
            "error": str(error),
            "code": "missing_file",
            "path": "/p/missing.js",
            "required_by": "/p/app.js",
        }

    def test_to_dict_omits_unknown_requirer(self) -> None:
        """required_by is left out when no requiring file is known."""
        data = MissingFileError(Path("/p")).to_dict()
        assert "required_by" not in data

    def test_invalid_file_expected_type(self) -> None:
        """InvalidFileError says what kind of path was expected."""
        error = InvalidFileError(Path("/p/dir"), expected="a directory")
        assert "is not a directory" in str(error)
        assert error.expected == "a directory"

    def test_domain_mismatch_details(self) -> None:
        """DomainMismatchError reports both domains."""
        error = DomainMismatchError(Path("/server/b.js"), Path("/client/a.js"), "server", "client")
        data = error.to_dict()
        assert data["target_domain"] == "server"
        assert data["owner_domain"] == "client"
        assert "client" in str(error) and "server" in str(error)

    def test_cycle_chain(self) -> None:
        """CycleError lists the chain in order."""
        chain = [Path("/a.js"), Path("/b.js"), Path("/a.js")]
        error = CycleError(chain)
        assert error.cycle == chain
        assert str(error) == "Dependency cycle: /a.js -> /b.js -> /a.js"
        assert error.path == Path("/a.js")
        assert error.required_by == Path("/b.js")
        assert error.to_dict()["cycle"] == ["/a.js", "/b.js", "/a.js"]
