"""Unit tests for LocalFilesystem."""

from pathlib import Path

from load_order.resolver.filesystem import LocalFilesystem


class TestListings:
    """Tests for shallow and deep listings."""

    def test_list_shallow_sorted_children(self, tmp_path: Path) -> None:
        """Shallow listing returns immediate children, sorted."""
        (tmp_path / "b.js").write_text("")
        (tmp_path / "a.js").write_text("")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "c.js").write_text("")

        assert LocalFilesystem().list_shallow(tmp_path) == ["a.js", "b.js", "sub"]

    def test_list_deep_includes_directories(self, tmp_path: Path) -> None:
        """Deep listing returns files and directories relative to the root."""
        (tmp_path / "a.js").write_text("")
        (tmp_path / "sub" / "inner").mkdir(parents=True)
        (tmp_path / "sub" / "inner" / "c.js").write_text("")
        (tmp_path / "sub" / "b.js").write_text("")

        entries = LocalFilesystem().list_deep(tmp_path)

        assert entries == [
            "a.js",
            "sub",
            str(Path("sub") / "b.js"),
            str(Path("sub") / "inner"),
            str(Path("sub") / "inner" / "c.js"),
        ]

    def test_ignore_hidden(self, tmp_path: Path) -> None:
        """Hidden files and directories are skipped when asked."""
        (tmp_path / ".hidden").mkdir()
        (tmp_path / ".hidden" / "x.js").write_text("")
        (tmp_path / ".env.js").write_text("")
        (tmp_path / "a.js").write_text("")

        assert LocalFilesystem(ignore_hidden=True).list_deep(tmp_path) == ["a.js"]
        assert LocalFilesystem(ignore_hidden=True).list_shallow(tmp_path) == ["a.js"]
        assert ".env.js" in LocalFilesystem().list_shallow(tmp_path)


class TestReadLinesWhile:
    """Tests for read_lines_while."""

    def test_stops_at_first_failing_line(self, tmp_path: Path) -> None:
        """Reading stops at the first line that fails the predicate."""
        path = tmp_path / "a.js"
        path.write_text("//= one\n//= two\ncode()\n//= three\n")

        lines = LocalFilesystem().read_lines_while(path, lambda line: line.startswith("//="))

        assert lines == ["//= one", "//= two"]

    def test_strips_line_endings(self, tmp_path: Path) -> None:
        """Lines come back without trailing newlines (including CRLF)."""
        path = tmp_path / "a.js"
        path.write_bytes(b"//= one\r\n//= two")

        lines = LocalFilesystem().read_lines_while(path, lambda line: True)

        assert lines == ["//= one", "//= two"]

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file yields no lines."""
        path = tmp_path / "a.js"
        path.write_text("")
        assert LocalFilesystem().read_lines_while(path, lambda line: True) == []

    def test_existence_checks(self, tmp_path: Path) -> None:
        """exists and is_file distinguish files from directories."""
        fs = LocalFilesystem()
        (tmp_path / "a.js").write_text("")
        assert fs.exists(tmp_path / "a.js") and fs.is_file(tmp_path / "a.js")
        assert fs.exists(tmp_path) and not fs.is_file(tmp_path)
        assert not fs.exists(tmp_path / "missing.js")
