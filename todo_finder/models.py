"""
Core data models for todo-finder.

This module defines the Pydantic models and enums shared by the scanner,
the CSV writer and the CLI.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# Enums
# =============================================================================


class SupportedLanguage(str, Enum):
    """Source languages recognized by file extension."""

    RUST = "rs"
    PYTHON = "py"
    JAVA = "java"
    TYPESCRIPT = "ts"
    JAVASCRIPT = "js"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["SupportedLanguage"]:
        """Look up a language by extension (without the dot, case-sensitive)."""
        try:
            return cls(extension)
        except ValueError:
            return None


# =============================================================================
# Scan Models
# =============================================================================


class TodoRecord(BaseModel):
    """A single TODO comment found in a source file."""

    file_path: str = Field(..., description="Path as traversed, not normalized")
    line_number: int = Field(..., ge=1, description="Line number (1-indexed)")
    comment_text: str = Field(..., min_length=1, description="Trimmed comment body")

    @field_validator("comment_text")
    @classmethod
    def validate_comment_text(cls, v: str) -> str:
        """Ensure the comment body is already trimmed."""
        if v != v.strip():
            raise ValueError("comment_text must not have surrounding whitespace")
        return v

    def as_row(self) -> List[str]:
        """Return the record as a CSV row."""
        return [self.file_path, str(self.line_number), self.comment_text]


class ScanSummary(BaseModel):
    """Outcome of one directory scan."""

    directory: str
    output_path: str
    files_scanned: int = Field(0, ge=0)
    todos_found: int = Field(0, ge=0)
    files_failed: List[str] = Field(default_factory=list)
    todos_per_file: Dict[str, int] = Field(default_factory=dict)

    def record_file(self, path: str, todo_count: int) -> None:
        """Account for a fully processed file."""
        self.files_scanned += 1
        self.todos_found += todo_count
        if todo_count:
            self.todos_per_file[path] = todo_count
