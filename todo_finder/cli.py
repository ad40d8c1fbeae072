"""
Command-line interface for todo-finder.

Usage:
    todo-finder <directory> <output.csv> [--debug] [--keep-going] ...
"""

from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todo_finder.config import Settings, get_settings
from todo_finder.models import ScanSummary
from todo_finder.scanner.runner import scan_directory
from todo_finder.utils.errors import TodoFinderException, UsageError
from todo_finder.utils.logging import setup_logging

USAGE = "Usage: todo-finder <directory> <output.csv>"

app = typer.Typer(
    name="todo-finder",
    help="Collect single-line TODO comments from a source tree into a CSV file.",
    add_completion=False,
)
# stdout is reserved for the result line
console = Console(stderr=True)


def _parse_arguments(paths: Optional[List[str]]) -> Tuple[str, str]:
    paths = paths or []
    if len(paths) != 2:
        raise UsageError(received=len(paths))
    return paths[0], paths[1]


def _build_settings(
    debug: bool,
    log_file: Optional[Path],
    keep_going: bool,
    no_ignore: bool,
    hidden: bool,
) -> Settings:
    base = get_settings()
    overrides = {}
    if debug:
        overrides["log_level"] = "DEBUG"
    if log_file:
        overrides["log_file"] = str(log_file)
    if keep_going:
        overrides["keep_going"] = True
    if hidden:
        overrides["include_hidden"] = True
    if no_ignore:
        overrides.update(
            honor_ignore=False,
            honor_git_ignore=False,
            honor_git_global=False,
            honor_git_exclude=False,
        )
    if not overrides:
        return base
    return Settings(**overrides)


def _print_summary(summary: ScanSummary) -> None:
    table = Table(title=f"TODOs in {summary.directory}")
    table.add_column("File", style="cyan")
    table.add_column("TODOs", justify="right")

    for path, count in summary.todos_per_file.items():
        table.add_row(escape(path), str(count))

    table.add_row("", "")
    table.add_row("Files scanned", str(summary.files_scanned))
    table.add_row("Total TODOs", str(summary.todos_found))
    if summary.files_failed:
        table.add_row("Files skipped", f"[red]{len(summary.files_failed)}[/red]")

    console.print(table)


@app.command(context_settings={"ignore_unknown_options": True})
def main(
    paths: Optional[List[str]] = typer.Argument(
        None,
        metavar="DIRECTORY OUTPUT_CSV",
        help="Directory to scan and CSV file to write",
        show_default=False,
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write JSON logs to this file",
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        "-k",
        help="Skip unreadable source files instead of aborting",
    ),
    no_ignore: bool = typer.Option(
        False,
        "--no-ignore",
        help="Do not honor .ignore, .gitignore or git exclude files",
    ),
    hidden: bool = typer.Option(False, "--hidden", help="Scan hidden files and directories"),
    summary: bool = typer.Option(
        False,
        "--summary",
        "-s",
        help="Print a per-file summary table to stderr",
    ),
):
    """Scan DIRECTORY for // and # TODO: comments and save them to OUTPUT_CSV."""
    try:
        directory, output_path = _parse_arguments(paths)
    except UsageError:
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)

    try:
        settings = _build_settings(debug, log_file, keep_going, no_ignore, hidden)
        setup_logging(
            log_level=settings.log_level,
            log_file_path=settings.get_log_file_path(),
            use_structured_logging=settings.structured_logs,
        )
        result = scan_directory(directory, output_path, settings=settings)
    except TodoFinderException as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    if summary:
        _print_summary(result)

    typer.echo(f"Results saved to: {output_path}")


if __name__ == "__main__":
    app()
