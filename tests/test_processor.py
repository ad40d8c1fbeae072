"""
Tests for per-file TODO processing.
"""

from unittest.mock import patch

import pytest

from todo_finder.models import TodoRecord
from todo_finder.scanner.processor import display_path, process_file, read_lines
from todo_finder.utils.errors import (
    OutputWriteError,
    SourceDecodeError,
    SourceFileError,
    SourceReadError,
)


class TestProcessFile:
    """Test process_file against real files."""

    def test_records_in_line_order(self, temp_dir, list_sink):
        """Test that matches are emitted with 1-based line numbers, in order."""
        path = temp_dir / "lib.rs"
        path.write_text(
            "fn main() {\n"
            "    // TODO: first\n"
            "    let x = 5; // TODO: inline is skipped\n"
            "    // TODO:   second  \n"
            "}\n"
        )

        found = process_file(str(path), list_sink)

        assert found == 2
        assert list_sink.records == [
            TodoRecord(file_path=str(path), line_number=2, comment_text="first"),
            TodoRecord(file_path=str(path), line_number=4, comment_text="second"),
        ]

    def test_path_is_recorded_as_given(self, temp_dir, list_sink, monkeypatch):
        """Test that relative paths are not canonicalized."""
        (temp_dir / "src").mkdir()
        (temp_dir / "src" / "app.py").write_text("# TODO: relative\n")
        monkeypatch.chdir(temp_dir)

        process_file("./src/../src/app.py", list_sink)

        assert list_sink.records[0].file_path == "./src/../src/app.py"

    def test_accepts_path_objects(self, temp_dir, list_sink):
        """Test that PathLike arguments are recorded as strings."""
        path = temp_dir / "a.py"
        path.write_text("# TODO: pathlike")

        process_file(path, list_sink)

        assert list_sink.records[0].file_path == str(path)

    def test_crlf_and_missing_final_newline(self, temp_dir, list_sink):
        """Test Windows line endings and a last line without terminator."""
        path = temp_dir / "win.ts"
        path.write_bytes(b"// TODO: one\r\nconst a = 1;\r\n// TODO: two")

        process_file(str(path), list_sink)

        assert [(r.line_number, r.comment_text) for r in list_sink.records] == [(1, "one"), (3, "two")]

    def test_empty_file(self, temp_dir, list_sink):
        """Test that an empty file yields nothing."""
        path = temp_dir / "empty.js"
        path.write_text("")

        assert process_file(str(path), list_sink) == 0
        assert list_sink.records == []

    def test_missing_file(self, temp_dir, list_sink):
        """Test that a missing file raises SourceReadError chained to the OS error."""
        with pytest.raises(SourceReadError) as exc_info:
            process_file(str(temp_dir / "missing.py"), list_sink)

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.path == str(temp_dir / "missing.py")

    def test_permission_denied(self, temp_dir, list_sink):
        """Test that an open failure propagates as SourceReadError."""
        path = temp_dir / "locked.py"
        path.write_text("# TODO: unreachable")

        with patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(SourceReadError) as exc_info:
                process_file(str(path), list_sink)

        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert list_sink.records == []

    def test_directory_is_a_read_error(self, temp_dir, list_sink):
        """Test that opening a directory fails like any other open error."""
        directory = temp_dir / "pkg.py"
        directory.mkdir()

        with pytest.raises(SourceFileError):
            process_file(str(directory), list_sink)

    def test_invalid_utf8_stops_file(self, temp_dir, list_sink):
        """Test that a bad line aborts the file after earlier records are emitted."""
        path = temp_dir / "bad.py"
        path.write_bytes(b"# TODO: before\n# TODO: \xff\xfe broken\n# TODO: after\n")

        with pytest.raises(SourceDecodeError) as exc_info:
            process_file(str(path), list_sink)

        assert exc_info.value.line_number == 2
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert [r.comment_text for r in list_sink.records] == ["before"]

    def test_read_failure_midway(self, temp_dir, list_sink):
        """Test that an OS error while reading surfaces as SourceReadError."""
        path = temp_dir / "flaky.rs"
        path.write_text("// TODO: one\n// TODO: two\n")

        real_open = open

        class FlakyFile:
            def __init__(self, f):
                self._f = f
                self._calls = 0

            def readline(self):
                self._calls += 1
                if self._calls == 2:
                    raise OSError(5, "Input/output error")
                return self._f.readline()

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                self._f.close()

        with patch("builtins.open", side_effect=lambda p, mode="r": FlakyFile(real_open(p, mode))):
            with pytest.raises(SourceReadError) as exc_info:
                process_file(str(path), list_sink)

        assert exc_info.value.line_number == 2
        assert [r.comment_text for r in list_sink.records] == ["one"]

    def test_sink_failure_propagates(self, temp_dir):
        """Test that a failing sink aborts processing with its own error."""
        path = temp_dir / "a.py"
        path.write_text("# TODO: one\n# TODO: two\n")

        class FullDisk:
            def __init__(self):
                self.calls = 0

            def write(self, record):
                self.calls += 1
                raise OutputWriteError("out.csv", OSError(28, "No space left on device"))

        sink = FullDisk()
        with pytest.raises(OutputWriteError):
            process_file(str(path), sink)
        assert sink.calls == 1


class TestReadLines:
    """Test the line reader."""

    def test_numbering_and_terminators(self, temp_dir):
        """Test that lines are numbered from 1 and keep their terminator."""
        path = temp_dir / "a.py"
        path.write_bytes(b"a\nb\r\nc")

        assert list(read_lines(str(path))) == [(1, "a\n"), (2, "b\r\n"), (3, "c")]

    def test_lone_carriage_return_does_not_split(self, temp_dir):
        """Test that only newline characters split lines."""
        path = temp_dir / "a.py"
        path.write_bytes(b"a\rb\n")

        assert list(read_lines(str(path))) == [(1, "a\rb\n")]


class TestDisplayPath:
    """Test conversion of paths to UTF-8-safe text."""

    def test_valid_path_unchanged(self):
        """Test that encodable paths are returned as given."""
        assert display_path("./src/../a.py") == "./src/../a.py"

    def test_surrogate_escaped_bytes_replaced(self):
        """Test that undecodable name bytes become U+FFFD."""
        assert display_path("dir/bad\udcff.py") == "dir/bad�.py"
