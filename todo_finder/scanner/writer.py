"""
CSV output for TODO records.
"""

import csv
from typing import Optional, TextIO

from todo_finder.models import TodoRecord
from todo_finder.utils.errors import OutputWriteError

HEADER = ("File", "Line", "Comment")


class CsvTodoWriter:
    """Write TODO records as CSV rows with a `File,Line,Comment` header."""

    def __init__(self, stream: TextIO, path: Optional[str] = None, owns_stream: bool = False) -> None:
        self.stream = stream
        self.path = path
        self.rows_written = 0
        self._owns_stream = owns_stream
        self._writer = csv.writer(stream, lineterminator="\n")

    @classmethod
    def open(cls, path: str) -> "CsvTodoWriter":
        """Create (or truncate) the output file and write the header."""
        try:
            stream = open(path, "w", newline="", encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(path, e) from e

        writer = cls(stream, path=path, owns_stream=True)
        try:
            writer.write_header()
        except OutputWriteError:
            stream.close()
            raise
        return writer

    def write_header(self) -> None:
        self._write_row(HEADER)

    def write(self, record: TodoRecord) -> None:
        self._write_row(record.as_row())
        self.rows_written += 1

    def _write_row(self, row) -> None:
        try:
            self._writer.writerow(row)
        except (OSError, UnicodeEncodeError) as e:
            raise OutputWriteError(self.path, e) from e

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise OutputWriteError(self.path, e) from e

    def close(self) -> None:
        if self.stream.closed:
            return
        try:
            self.flush()
        finally:
            if self._owns_stream:
                self.stream.close()

    def __enter__(self) -> "CsvTodoWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
