"""
Source file classification by extension.
"""

import os
from pathlib import Path
from typing import Union

from todo_finder.models import SupportedLanguage
from todo_finder.scanner.walker import WalkEntry

Entry = Union[WalkEntry, os.DirEntry, Path, str]


def _extension(name: str) -> str:
    stem, dot, extension = name.rpartition(".")
    # ".rs" is a hidden file without an extension
    if not dot or not stem:
        return ""
    return extension


def is_supported(entry: Entry) -> bool:
    """Return True for regular files with a supported language extension."""
    if isinstance(entry, (WalkEntry, os.DirEntry)):
        name = entry.name
        is_file = entry.is_file()
    else:
        path = os.fspath(entry)
        name = os.path.basename(path)
        is_file = os.path.isfile(path)

    return is_file and SupportedLanguage.from_extension(_extension(name)) is not None
