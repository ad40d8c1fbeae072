# Config
"""
Configuration for todo-finder.

Values come from keyword overrides, then TODO_FINDER_* environment
variables (a local .env file is loaded first), then the defaults below.
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from todo_finder.utils.errors import InvalidConfigurationError

ENV_PREFIX = "TODO_FINDER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidConfigurationError(name, raw)


class Settings:
    # Logging
    log_level = "WARNING"
    log_file: Optional[str] = None
    dev_mode = False
    structured_logs = True

    # Traversal
    include_hidden = False
    honor_ignore = True
    honor_git_ignore = True
    honor_git_global = True
    honor_git_exclude = True
    require_git = True

    # Error policy
    keep_going = False

    def __init__(self, **overrides: Any) -> None:
        for name in self._fields():
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            default = getattr(type(self), name)
            if isinstance(default, bool):
                setattr(self, name, _parse_bool(name, raw))
            elif name == "log_level":
                setattr(self, name, raw.strip().upper())
            else:
                setattr(self, name, raw)

        for name, value in overrides.items():
            if name not in self._fields():
                raise InvalidConfigurationError(name)
            setattr(self, name, value)

        if self.log_level not in _LOG_LEVELS:
            raise InvalidConfigurationError("log_level", self.log_level)

    @classmethod
    def _fields(cls) -> list[str]:
        return [
            name
            for name, value in vars(cls).items()
            if not name.startswith("_") and not callable(value) and not isinstance(value, classmethod)
        ]

    def get_log_file_path(self) -> Optional[Path]:
        return Path(self.log_file) if self.log_file else None


# Singleton instance
_settings = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        load_dotenv()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
