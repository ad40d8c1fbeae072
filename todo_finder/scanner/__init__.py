"""
TODO scanning: line extraction, file classification, per-file processing,
ignore-aware traversal and CSV output.
"""

from .classifier import is_supported
from .extractor import TODO_PATTERN, extract_todo
from .processor import TodoSink, process_file
from .runner import scan_directory
from .walker import IgnoreWalker, WalkEntry
from .writer import CsvTodoWriter

__all__ = [
    "TODO_PATTERN",
    "extract_todo",
    "is_supported",
    "process_file",
    "TodoSink",
    "IgnoreWalker",
    "WalkEntry",
    "CsvTodoWriter",
    "scan_directory",
]
