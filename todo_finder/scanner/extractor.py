"""
Single-line TODO comment extraction.

A TODO comment is a line whose first non-whitespace content is a `//` or `#`
introducer followed by the literal `TODO:` marker and a non-empty note.
TODOs trailing code on the same line are not matched.
"""

import re
from typing import Optional

# Compiled once and shared read-only; re.Pattern objects hold no mutable state.
TODO_PATTERN = re.compile(r"^(?:\s*//|\s*#)\s*TODO:\s*(.*\S)\s*$", re.MULTILINE)


def extract_todo(line: str, pattern: re.Pattern = TODO_PATTERN) -> Optional[str]:
    """
    Extract the note of a single-line TODO comment.

    Args:
        line: One line of source code, with or without its line terminator
        pattern: Compiled TODO pattern whose first group captures the note

    Returns:
        The trimmed note, or None if the line is not a TODO comment
    """
    match = pattern.search(line)
    if match is None:
        return None
    return match.group(1).strip() or None
