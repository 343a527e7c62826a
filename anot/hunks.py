"""
hunks.py - Added/modified line detection from `git diff --unified=0`.

Provides:
- parse_hunk_headers(): new-side (start, count) of every hunk header
- expand_hunks(): union of the hunks' line ranges
- modified_line_numbers(): run git for one file and return its modified lines

Diff unavailability (git missing, not a repository, non-zero exit status,
output that is not UTF-8) yields an empty set. An empty set therefore
means either "nothing modified" or "diff unavailable"; callers cannot
tell the two apart.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Iterable, Union

from anot.models import DiffHunk

logger = logging.getLogger(__name__)

# @@ -<old>[,<count>] +<start>[,<count>] @@
_HUNK_RE = re.compile(r"@@ -\d+(?:,\d+)? \+(\d+)(?:,(\d+))? @@")


def parse_hunk_headers(diff_text: str) -> list[DiffHunk]:
    """Return the new-side range of each hunk header in *diff_text*.

    A missing count defaults to 1, per the unified diff format.
    """
    hunks: list[DiffHunk] = []
    for match in _HUNK_RE.finditer(diff_text):
        start, count = match.group(1), match.group(2)
        hunks.append(DiffHunk(
            start=int(start),
            count=int(count) if count is not None else 1,
        ))
    return hunks


def expand_hunks(hunks: Iterable[DiffHunk]) -> set[int]:
    """Union of [start, start + count) over all hunks.

    Pure deletions have a new-side count of 0 and contribute nothing.
    """
    lines: set[int] = set()
    for hunk in hunks:
        lines.update(hunk.lines())
    return lines


def modified_line_numbers(
    file_path: Union[str, Path],
    git_binary: str = "git",
) -> set[int]:
    """Get line numbers added or modified in the working tree for one file.

    Runs ``git diff --unified=0 <file>`` from the file's parent directory
    (or the current directory if there is none). Blocks until git exits.

    Args:
        file_path: Path to the file to inspect.
        git_binary: Name or path of the git executable.

    Returns:
        Set of 1-based line numbers, or an empty set if the diff could not
        be obtained.
    """
    abs_path = os.path.abspath(file_path)
    parent = os.path.dirname(abs_path) or "."

    try:
        result = subprocess.run(
            [git_binary, "diff", "--unified=0", abs_path],
            cwd=parent,
            capture_output=True,
        )
    except OSError as exc:
        logger.debug("git diff unavailable for '%s': %s", file_path, exc)
        return set()

    if result.returncode != 0:
        logger.debug(
            "git diff exited with %d for '%s': %s",
            result.returncode, file_path, result.stderr.decode("utf-8", errors="replace").strip(),
        )
        return set()

    try:
        diff_text = result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("git diff output for '%s' is not valid UTF-8", file_path)
        return set()

    hunks = parse_hunk_headers(diff_text)
    logger.debug("git diff for '%s': %d hunk(s)", file_path, len(hunks))
    return expand_hunks(hunks)
