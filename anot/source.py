"""
source.py - Reading source files and enumerating a source tree.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from anot.errors import SourceReadError
from anot.registry import LanguageRegistry

logger = logging.getLogger(__name__)


def read_source(path: Union[str, Path]) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        SourceReadError: if the file cannot be opened, read, or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, exc) from exc


def walk_source_files(
    root: Union[str, Path],
    registry: LanguageRegistry,
    exclude_dirs: Optional[list[str]] = None,
) -> list[str]:
    """Recursively enumerate supported source files under *root*.

    Symbolic links are followed; a directory reached twice through links is
    visited only once. Entries that cannot be listed are skipped silently.
    Paths are returned in a stable (sorted) order.
    """
    if exclude_dirs is None:
        exclude_dirs = [".git"]
    result: list[str] = []
    seen: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames[:] = []
            continue
        seen.add(real)
        # Prune excluded directories in-place
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirs)
        for fname in sorted(filenames):
            fp = os.path.join(dirpath, fname)
            if registry.classify(fp) is None:
                continue
            if not os.path.isfile(fp):
                continue
            result.append(fp)
    logger.debug("Found %d source files under '%s'", len(result), root)
    return result
