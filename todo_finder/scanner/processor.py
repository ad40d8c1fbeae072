"""
Per-file TODO scanning.

Files are read as bytes and split on newlines so that each line is decoded
on its own; a line that is not valid UTF-8 stops the file with an error.
"""

import os
import re
from typing import Iterator, Protocol, Tuple, Union

from todo_finder.models import TodoRecord
from todo_finder.scanner.extractor import TODO_PATTERN, extract_todo
from todo_finder.utils.errors import SourceDecodeError, SourceReadError
from todo_finder.utils.logging import get_logger

logger = get_logger(__name__)


class TodoSink(Protocol):
    """Destination for extracted TODO records."""

    def write(self, record: TodoRecord) -> None:
        ...


def read_lines(file_path: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_number, line) pairs of a UTF-8 file, numbering from 1.

    Raises:
        SourceReadError: If the file cannot be opened or read
        SourceDecodeError: If a line is not valid UTF-8
    """
    try:
        f = open(file_path, "rb")
    except OSError as e:
        raise SourceReadError(file_path, e) from e

    with f:
        line_number = 0
        while True:
            try:
                raw_line = f.readline()
            except OSError as e:
                raise SourceReadError(file_path, e, line_number=line_number + 1) from e
            if not raw_line:
                return

            line_number += 1
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise SourceDecodeError(file_path, e, line_number=line_number) from e

            yield line_number, line


def display_path(file_path: str) -> str:
    """Return the path as UTF-8-safe text; undecodable bytes become U+FFFD."""
    try:
        file_path.encode("utf-8")
    except UnicodeEncodeError:
        return os.fsencode(file_path).decode("utf-8", errors="replace")
    return file_path


def process_file(
    path: Union[str, "os.PathLike[str]"],
    sink: TodoSink,
    pattern: re.Pattern = TODO_PATTERN,
) -> int:
    """
    Scan one file and write every TODO comment to the sink.

    Args:
        path: File to scan; recorded in the output as given, with
            undecodable name bytes replaced
        sink: Receiver of TodoRecord objects, in line order
        pattern: Compiled TODO pattern

    Returns:
        Number of records written

    Raises:
        SourceReadError: If the file cannot be opened or read
        SourceDecodeError: If a line is not valid UTF-8
        OutputWriteError: If the sink fails to write
    """
    file_path = os.fspath(path)
    record_path = display_path(file_path)
    found = 0

    for line_number, line in read_lines(file_path):
        comment = extract_todo(line, pattern)
        if comment is None:
            continue

        sink.write(
            TodoRecord(
                file_path=record_path,
                line_number=line_number,
                comment_text=comment,
            )
        )
        found += 1

    logger.debug(f"Scanned {record_path}: {found} TODO(s)")
    return found
