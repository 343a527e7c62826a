"""
scanner.py - The annotation pipeline.

file path → classify → read → extract comments → match tags → scope
(optionally intersected with the file's modified lines).

Single-file scans propagate UnsupportedFileError / SourceReadError to the
caller. Directory scans skip unsupported files silently and record read
failures per file so sibling files are still processed.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from anot.errors import SourceReadError
from anot.extractor import extract
from anot.hunks import modified_line_numbers
from anot.models import (
    AnnotationRecord, FileError, LanguageVariant, ScanConfig, ScanReport,
)
from anot.registry import LanguageRegistry, default_registry
from anot.source import read_source, walk_source_files
from anot.tags import match_tags, normalize_tags

logger = logging.getLogger(__name__)

DiffProvider = Callable[[Union[str, Path]], set[int]]


def scope(
    annotations: Iterable[AnnotationRecord],
    modified_lines: set[int],
    enabled: bool,
) -> list[AnnotationRecord]:
    """Keep only annotations on modified lines when *enabled*.

    With scoping disabled every annotation passes through unchanged.
    """
    if not enabled:
        return list(annotations)
    return [a for a in annotations if a.line in modified_lines]


class AnnotationScanner:
    """Runs the annotation pipeline over files and directory trees.

    Usage::

        scanner = AnnotationScanner(tags=["todo", "note"], diff_only=True)
        report = scanner.scan_path("src/")
        for a in report.annotations:
            print(a.file_path, a.line, a.tag)
    """

    def __init__(
        self,
        registry: Optional[LanguageRegistry] = None,
        tags: Optional[list[str]] = None,
        diff_only: bool = False,
        diff_provider: DiffProvider = modified_line_numbers,
        exclude_dirs: Optional[list[str]] = None,
        workers: int = 1,
    ) -> None:
        defaults = ScanConfig()
        self.registry = registry or default_registry()
        self.tags = normalize_tags(tags) if tags is not None else defaults.tags
        if not self.tags:
            raise ValueError("at least one non-empty tag is required")
        self.diff_only = diff_only
        self.diff_provider = diff_provider
        self.exclude_dirs = exclude_dirs if exclude_dirs is not None else defaults.exclude_patterns
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers

    @classmethod
    def from_config(
        cls,
        cfg: ScanConfig,
        registry: Optional[LanguageRegistry] = None,
        diff_provider: DiffProvider = modified_line_numbers,
    ) -> "AnnotationScanner":
        return cls(
            registry=registry,
            tags=cfg.tags,
            diff_only=cfg.diff_only,
            diff_provider=diff_provider,
            exclude_dirs=cfg.exclude_patterns,
            workers=cfg.workers,
        )

    # ------------------------------------------------------------------
    # Per-file pipeline
    # ------------------------------------------------------------------

    def scan_source(
        self,
        file_path: Union[str, Path],
        text: str,
        variant: LanguageVariant,
    ) -> list[AnnotationRecord]:
        """Extract, match and scope annotations for already-loaded text."""
        comments = extract(text, variant, self.registry)
        annotations = match_tags(comments, self.tags, str(file_path))
        if not self.diff_only or not annotations:
            return annotations
        return scope(annotations, self.diff_provider(file_path), enabled=True)

    def scan_file(self, file_path: Union[str, Path]) -> list[AnnotationRecord]:
        """Scan one file.

        Raises:
            UnsupportedFileError: the extension is not supported.
            SourceReadError: the file could not be read.
        """
        variant = self.registry.require(file_path)
        text = read_source(file_path)
        return self.scan_source(file_path, text, variant)

    # ------------------------------------------------------------------
    # Tree scan
    # ------------------------------------------------------------------

    def scan_path(self, root: Union[str, Path]) -> ScanReport:
        """Scan a single file or every supported file under a directory."""
        if not os.path.isdir(root):
            return ScanReport(annotations=self.scan_file(root), files_scanned=1)

        files = walk_source_files(root, self.registry, exclude_dirs=self.exclude_dirs)
        if self.workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                outcomes = list(executor.map(self._scan_isolated, files))
        else:
            outcomes = [self._scan_isolated(fp) for fp in files]

        report = ScanReport(files_scanned=len(files))
        for annotations, error in outcomes:
            if error is not None:
                report.errors.append(error)
            else:
                report.annotations.extend(annotations)
        return report

    def _scan_isolated(
        self, file_path: str,
    ) -> tuple[list[AnnotationRecord], Optional[FileError]]:
        try:
            return self.scan_file(file_path), None
        except SourceReadError as exc:
            logger.error("Cannot read '%s': %s", file_path, exc.cause)
            return [], FileError(file_path=file_path, message=str(exc))
