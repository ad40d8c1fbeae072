"""
Shared fixtures for todo-finder tests.
"""

from pathlib import Path
from typing import Callable, Dict, Union

import pytest

from todo_finder import config
from todo_finder.config import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep TODO_FINDER_* variables and cached settings out of every test."""
    for name in Settings._fields():
        monkeypatch.delenv(config.ENV_PREFIX + name.upper(), raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Working directory for a test tree."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def settings() -> Settings:
    """Settings that do not depend on the user's git configuration."""
    return Settings(honor_git_global=False)


@pytest.fixture
def make_tree(temp_dir: Path) -> Callable[[Dict[str, Union[str, bytes]]], Path]:
    """Create files under temp_dir from a {relative path: content} mapping."""

    def _make(files: Dict[str, Union[str, bytes]]) -> Path:
        for relative, content in files.items():
            path = temp_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return temp_dir

    return _make


class ListSink:
    """In-memory TodoSink."""

    def __init__(self):
        self.records = []

    def write(self, record):
        self.records.append(record)


@pytest.fixture
def list_sink() -> ListSink:
    return ListSink()
