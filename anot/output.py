"""
output.py - Output formatters for CLI.

Abstraction layer for formatting CLI output. Supports:
- JSON (machine-friendly, default)
- Human-readable (Rich tables, with --humanize flag)
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from anot.models import ScanReport


console = Console()


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format_annotations(self, report: ScanReport) -> None:
        """Format the annotations (and per-file errors) of a scan."""
        pass

    @abstractmethod
    def format_modified_lines(self, file_path: str, lines: set[int]) -> None:
        """Format the modified-line set of one file."""
        pass


class JSONFormatter(OutputFormatter):
    """Machine-friendly JSON output (default)."""

    def format_annotations(self, report: ScanReport) -> None:
        output = {
            "count": len(report.annotations),
            "files_scanned": report.files_scanned,
            "annotations": [a.to_dict() for a in report.annotations],
            "errors": [
                {"file": e.file_path, "message": e.message}
                for e in report.errors
            ],
        }
        print(json.dumps(output, indent=2))

    def format_modified_lines(self, file_path: str, lines: set[int]) -> None:
        output = {
            "file": file_path,
            "count": len(lines),
            "lines": sorted(lines),
        }
        print(json.dumps(output, indent=2))


class HumanFormatter(OutputFormatter):
    """Human-readable output using Rich (table format)."""

    # Default color mapping; unknown tags are printed unstyled
    COLOR_MAP = {
        "todo": "yellow",
        "note": "cyan",
        "hypothesis": "magenta",
        "fixme": "red",
    }

    def _colorize_tag(self, tag: str) -> str:
        color = self.COLOR_MAP.get(tag.lower())
        if not color:
            return escape(tag)
        return f"[{color}]{escape(tag)}[/{color}]"

    def format_annotations(self, report: ScanReport) -> None:
        table = Table(
            "File",
            "Line",
            "Tag",
            "Comment",
            title=f"Annotations ({len(report.annotations)} in {report.files_scanned} files)",
        )
        for a in report.annotations:
            table.add_row(
                escape(a.file_path),
                str(a.line),
                self._colorize_tag(a.tag),
                escape(a.comment.strip()),
            )
        console.print(table)
        for e in report.errors:
            console.print(f"[red]Error:[/red] {escape(e.message)}")

    def format_modified_lines(self, file_path: str, lines: set[int]) -> None:
        if not lines:
            console.print(f"[yellow]No modified lines in {escape(file_path)}.[/yellow]")
            return
        console.print(
            f"[bold]{escape(file_path)}[/bold]: "
            + ", ".join(str(n) for n in sorted(lines))
        )


def get_formatter(humanize: bool = False) -> OutputFormatter:
    """Get the appropriate formatter based on flags."""
    if humanize:
        return HumanFormatter()
    return JSONFormatter()
