"""
models.py - Pydantic v2 data models for anot.

Defines data structures for:
- Supported language variants
- Comment and annotation records produced by the pipeline
- Diff hunks parsed from `git diff --unified=0`
- Scan reports and per-file errors
- Scan configuration
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LanguageVariant(str, Enum):
    """Supported source languages."""
    PYTHON = "python"
    RUST = "rust"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


# ---------------------------------------------------------------------------
# Pipeline records
# ---------------------------------------------------------------------------

class CommentRecord(BaseModel):
    """A single comment node captured from a syntax tree.

    `text` is the exact source span of the node, delimiters included.
    `end_line` is only set when the comment spans more than one line.
    """
    line: int = Field(..., ge=1, description="1-based start line")
    text: str
    end_line: Optional[int] = None


class AnnotationRecord(BaseModel):
    """One configured tag found inside one comment."""
    file_path: str
    line: int = Field(..., ge=1)
    tag: str
    comment: str

    def to_dict(self) -> dict:
        return {
            "file": self.file_path,
            "line": self.line,
            "tag": self.tag,
            "comment": self.comment,
        }


class DiffHunk(BaseModel):
    """New-side range of one unified-diff hunk header."""
    start: int
    count: int = 1  # omitted count means exactly one line

    def lines(self) -> range:
        return range(self.start, self.start + self.count)


# ---------------------------------------------------------------------------
# Scan results
# ---------------------------------------------------------------------------

class FileError(BaseModel):
    """A failure local to one file during a directory scan."""
    file_path: str
    message: str


class ScanReport(BaseModel):
    """Result of scanning a file or a directory tree."""
    annotations: list[AnnotationRecord] = Field(default_factory=list)
    errors: list[FileError] = Field(default_factory=list)
    files_scanned: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------

DEFAULT_TAGS = ["todo", "note", "hypothesis"]


class ScanConfig(BaseModel):
    """Top-level configuration for a scan."""
    # Keywords to look for, matched case-insensitively
    tags: list[str] = Field(default_factory=lambda: list(DEFAULT_TAGS))
    # Restrict results to lines added or modified in the working tree
    diff_only: bool = False
    # Directory names to prune when walking
    exclude_patterns: list[str] = Field(default_factory=lambda: [".git"])
    # Thread pool size for per-file processing; 1 means sequential
    workers: int = Field(default=1, ge=1)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        from anot.tags import normalize_tags

        tags = normalize_tags(value)
        if not tags:
            raise ValueError("at least one non-empty tag is required")
        return tags
