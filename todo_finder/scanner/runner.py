"""
One scan run: walk, classify, extract, write.
"""

from typing import Optional

from todo_finder.config import Settings, get_settings
from todo_finder.models import ScanSummary
from todo_finder.scanner.classifier import is_supported
from todo_finder.scanner.processor import display_path, process_file
from todo_finder.scanner.walker import IgnoreWalker
from todo_finder.scanner.writer import CsvTodoWriter
from todo_finder.utils.errors import SourceFileError
from todo_finder.utils.logging import LogContext, get_logger, log_performance

logger = get_logger(__name__)


@log_performance
def scan_directory(
    directory: str,
    output_path: str,
    settings: Optional[Settings] = None,
) -> ScanSummary:
    """
    Scan a directory tree and write all TODO comments to a CSV file.

    Args:
        directory: Directory (or single file) to scan
        output_path: CSV file to create
        settings: Run settings (defaults to global settings)

    Returns:
        Summary of the run

    Raises:
        ScanRootError: If the directory does not exist
        SourceFileError: On the first unreadable source file, unless
            settings.keep_going is set
        OutputWriteError: If the CSV cannot be written
    """
    settings = settings or get_settings()
    walker = IgnoreWalker(directory, settings)
    summary = ScanSummary(directory=directory, output_path=output_path)

    with CsvTodoWriter.open(output_path) as sink:
        for entry in walker.walk():
            if not is_supported(entry):
                if not entry.is_dir:
                    logger.debug(f"Skipping unsupported file {entry.path}")
                continue

            path = display_path(entry.path)
            with LogContext(file_path=path):
                try:
                    found = process_file(entry.path, sink)
                except SourceFileError as e:
                    if not settings.keep_going:
                        raise
                    logger.warning(f"Skipping {path}: {e}")
                    summary.files_failed.append(path)
                    continue

            summary.record_file(path, found)

    logger.info(
        f"Found {summary.todos_found} TODO(s) in {summary.files_scanned} file(s)",
        extra={"files_failed": len(summary.files_failed)},
    )
    return summary
