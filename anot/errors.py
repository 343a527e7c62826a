"""
errors.py - Exception types raised by the anot pipeline.

Only failures that the caller can act on are modelled here. Parse
degradation and diff unavailability are not errors: the former yields
whatever comments the grammar recognised, the latter an empty line set.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class AnotError(Exception):
    """Base class for all anot errors."""


class UnsupportedFileError(AnotError):
    """The file extension does not map to a supported language."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        super().__init__(f"Unsupported file extension: {self.path}")


class SourceReadError(AnotError):
    """A classified source file could not be read or decoded."""

    def __init__(self, path: Union[str, Path], cause: Exception) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to read file '{self.path}': {cause}")
