"""
Recursive directory traversal honoring ignore files.

Entries are yielded depth-first with children sorted by name. Paths are
built by joining names onto the root exactly as given, so a relative root
produces relative paths.

Ignore sources, highest precedence first:
    1. `.ignore` then `.gitignore` of the entry's parent directory, then of
       each directory above it (up through the root's ancestors)
    2. the repository's `.git/info/exclude`
    3. the global git excludes file

Git-derived sources only apply inside a git repository.
"""

import os
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

import pathspec

from todo_finder.config import Settings, get_settings
from todo_finder.utils.errors import ScanRootError
from todo_finder.utils.logging import get_logger

logger = get_logger(__name__)

IGNORE_FILENAME = ".ignore"
GITIGNORE_FILENAME = ".gitignore"

_SECTION_RE = re.compile(r"^\s*\[\s*([A-Za-z0-9.-]+)")
_EXCLUDES_FILE_RE = re.compile(r"^\s*excludesfile\s*=\s*(.+?)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class WalkEntry:
    """A filesystem entry visited by the walker."""

    path: str
    depth: int
    is_dir: bool

    @property
    def name(self) -> str:
        return os.path.basename(self.path.rstrip("/\\")) or self.path

    def is_file(self) -> bool:
        """True for regular files, following a symlink to a file."""
        return os.path.isfile(self.path)


class IgnoreFile:
    """Compiled patterns of one ignore file, relative to its base directory."""

    def __init__(self, base_dir: str, spec: pathspec.PathSpec, source: str) -> None:
        self.base_dir = base_dir
        self.spec = spec
        self.source = source

    @classmethod
    def load(cls, path: str, base_dir: str) -> Optional["IgnoreFile"]:
        """Read an ignore file; returns None when it is missing or unreadable."""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Cannot read ignore file {path}: {e}")
            return None

        spec = pathspec.GitIgnoreSpec.from_lines(lines)
        if not spec.patterns:
            return None
        return cls(base_dir, spec, path)

    def check(self, abs_path: str, is_dir: bool) -> Optional[bool]:
        """
        Check a path against this file's patterns.

        Returns:
            True if ignored, False if re-included by a negation,
            None if no pattern applies
        """
        rel_path = os.path.relpath(abs_path, self.base_dir)
        if rel_path == os.curdir or rel_path.startswith(os.pardir):
            return None

        rel_path = rel_path.replace(os.sep, "/")
        if is_dir:
            rel_path += "/"
        return self.spec.check_file(rel_path).include


def find_repository_root(directory: str) -> Optional[str]:
    """Return the nearest directory at or above `directory` containing `.git`."""
    current = os.path.abspath(directory)
    while True:
        if os.path.exists(os.path.join(current, ".git")):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def _core_excludes_file(config_text: str) -> Optional[str]:
    """Return the last `excludesFile` value set in a `[core]` section."""
    section = None
    value = None
    for line in config_text.splitlines():
        header = _SECTION_RE.match(line)
        if header:
            section = header.group(1).lower()
            continue
        if section != "core":
            continue
        match = _EXCLUDES_FILE_RE.match(line)
        if match:
            value = match.group(1).strip('"')
    return value


def global_gitignore_path() -> Optional[str]:
    """
    Locate the user's global git excludes file.

    Reads `core.excludesFile` from ~/.gitconfig, then from the XDG git config,
    falling back to `$XDG_CONFIG_HOME/git/ignore`. `include.path` directives
    are not followed.
    """
    home = os.path.expanduser("~")
    xdg_config = os.environ.get("XDG_CONFIG_HOME") or os.path.join(home, ".config")

    for config_path in (
        os.path.join(home, ".gitconfig"),
        os.path.join(xdg_config, "git", "config"),
    ):
        try:
            with open(config_path, "r", encoding="utf-8", errors="replace") as f:
                excludes_file = _core_excludes_file(f.read())
        except OSError:
            continue
        if excludes_file:
            return os.path.expanduser(excludes_file)

    return os.path.join(xdg_config, "git", "ignore")


class IgnoreWalker:
    """Walk a directory tree, skipping hidden and ignored entries."""

    def __init__(self, root: str, settings: Optional[Settings] = None) -> None:
        """
        Initialize the walker.

        Args:
            root: Directory (or single file) to walk
            settings: Traversal settings (defaults to global settings)

        Raises:
            ScanRootError: If the root does not exist
        """
        if not os.path.exists(root):
            raise ScanRootError(root)

        self.root = root
        self.settings = settings or get_settings()
        self.root_abs = os.path.abspath(root)

        repo_root = None
        if self.settings.honor_git_ignore or self.settings.honor_git_exclude or self.settings.honor_git_global:
            repo_root = find_repository_root(self.root_abs)
        self.repo_root = repo_root
        self._git_enabled = repo_root is not None or not self.settings.require_git

    def walk(self) -> Iterator[WalkEntry]:
        """Yield the root and every non-ignored descendant."""
        if not os.path.isdir(self.root):
            yield WalkEntry(self.root, depth=0, is_dir=False)
            return

        matchers = self._ancestor_matchers() + self._repository_matchers()
        yield WalkEntry(self.root, depth=0, is_dir=True)
        yield from self._walk_dir(self.root, self.root_abs, 1, matchers)

    def _walk_dir(
        self,
        path: str,
        abs_path: str,
        depth: int,
        matchers: List[IgnoreFile],
    ) -> Iterator[WalkEntry]:
        matchers = self._directory_matchers(abs_path) + matchers

        try:
            with os.scandir(path) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {path}: {e}")
            return

        for child in children:
            if not self.settings.include_hidden and child.name.startswith("."):
                continue

            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            child_abs = os.path.join(abs_path, child.name)
            if self._is_ignored(child_abs, is_dir, matchers):
                logger.debug(f"Ignored {child.path}")
                continue

            yield WalkEntry(child.path, depth=depth, is_dir=is_dir)
            if is_dir:
                yield from self._walk_dir(child.path, child_abs, depth + 1, matchers)

    @staticmethod
    def _is_ignored(abs_path: str, is_dir: bool, matchers: List[IgnoreFile]) -> bool:
        for matcher in matchers:
            decision = matcher.check(abs_path, is_dir)
            if decision is not None:
                return decision
        return False

    def _directory_matchers(self, directory: str) -> List[IgnoreFile]:
        """Ignore files of one directory, highest precedence first."""
        matchers = []

        if self.settings.honor_ignore:
            matcher = IgnoreFile.load(os.path.join(directory, IGNORE_FILENAME), directory)
            if matcher:
                matchers.append(matcher)

        if self.settings.honor_git_ignore and self._git_enabled and self._within_repository(directory):
            matcher = IgnoreFile.load(os.path.join(directory, GITIGNORE_FILENAME), directory)
            if matcher:
                matchers.append(matcher)

        return matchers

    def _ancestor_matchers(self) -> List[IgnoreFile]:
        """Ignore files of the root's ancestors, nearest first."""
        matchers: List[IgnoreFile] = []
        current = self.root_abs
        while True:
            parent = os.path.dirname(current)
            if parent == current:
                return matchers
            matchers.extend(self._directory_matchers(parent))
            current = parent

    def _repository_matchers(self) -> List[IgnoreFile]:
        if not self._git_enabled or self.repo_root is None:
            return []

        matchers = []
        if self.settings.honor_git_exclude:
            exclude_path = os.path.join(self.repo_root, ".git", "info", "exclude")
            matcher = IgnoreFile.load(exclude_path, self.repo_root)
            if matcher:
                matchers.append(matcher)

        if self.settings.honor_git_global:
            global_path = global_gitignore_path()
            matcher = IgnoreFile.load(global_path, self.repo_root) if global_path else None
            if matcher:
                matchers.append(matcher)

        return matchers

    def _within_repository(self, directory: str) -> bool:
        if self.repo_root is None:
            return not self.settings.require_git
        return directory == self.repo_root or directory.startswith(self.repo_root + os.sep)
