"""
cli.py - Typer-based CLI for anot.

Commands:
  scan       <path>   Find tagged annotations in comments (file or directory)
  diff-lines <file>   Show lines added or modified in the working tree
  languages           List supported file extensions
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from anot.errors import AnotError
from anot.hunks import modified_line_numbers
from anot.models import ScanConfig
from anot.output import get_formatter
from anot.registry import LanguageRegistry
from anot.scanner import AnnotationScanner
from anot.tags import parse_tag_list

app = typer.Typer(
    name="anot",
    help="Find tagged annotations (todo, note, ...) in source-code comments.",
    add_completion=False,
)
console = Console(stderr=True)

CONFIG_FILE = "anot_config.json"

humanize_option = typer.Option(
    False,
    "--humanize",
    "-H",
    help="Use human-readable output (tables) instead of JSON",
)

# ---------------------------------------------------------------------------
# Configuration helpers
# ---------------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _load_config(config_path: Optional[str] = None) -> ScanConfig:
    """Load scan config from JSON file or return defaults."""
    if config_path:
        if not Path(config_path).exists():
            console.print(f"[red]Error: config file not found: {escape(config_path)}[/red]")
            raise typer.Exit(1)
        return ScanConfig.model_validate_json(Path(config_path).read_text())
    # Check for anot_config.json in CWD
    default = Path(CONFIG_FILE)
    if default.exists():
        return ScanConfig.model_validate_json(default.read_text())
    return ScanConfig()


# ---------------------------------------------------------------------------
# scan command
# ---------------------------------------------------------------------------


@app.command()
def scan(
    path: str = typer.Argument(..., help="File or directory to scan"),
    tags: Optional[str] = typer.Option(
        None, "--tags", "-t",
        help="Comma-separated keywords to match, e.g. 'todo,note'. Overrides config.",
    ),
    diff_only: Optional[bool] = typer.Option(
        None, "--diff-only/--all-lines",
        help="Only report annotations on lines added or modified in the working tree.",
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Number of files processed in parallel.",
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config JSON"),
    humanize: bool = humanize_option,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Find tagged annotations in the comments of PATH."""
    _setup_logging(verbose)

    try:
        cfg = _load_config(config)
        overrides: dict = {}
        if tags is not None:
            overrides["tags"] = parse_tag_list(tags)
        if diff_only is not None:
            overrides["diff_only"] = diff_only
        if workers is not None:
            overrides["workers"] = workers
        if overrides:
            cfg = ScanConfig.model_validate({**cfg.model_dump(), **overrides})
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    if not os.path.exists(path):
        console.print(f"[red]Error: path not found: {escape(path)}[/red]")
        raise typer.Exit(1)

    scanner = AnnotationScanner.from_config(cfg)
    try:
        report = scanner.scan_path(path)
    except AnotError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    get_formatter(humanize).format_annotations(report)

    if not report.ok:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# diff-lines command
# ---------------------------------------------------------------------------


@app.command("diff-lines")
def diff_lines(
    path: str = typer.Argument(..., help="File to inspect"),
    humanize: bool = humanize_option,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show the lines of PATH added or modified in the working tree (git diff)."""
    _setup_logging(verbose)
    get_formatter(humanize).format_modified_lines(path, modified_line_numbers(path))


# ---------------------------------------------------------------------------
# languages command
# ---------------------------------------------------------------------------


@app.command()
def languages() -> None:
    """List supported file extensions and their languages."""
    table = Table("Extension", "Language", title="Supported languages")
    for ext, variant in LanguageRegistry.supported_extensions().items():
        table.add_row(ext, variant.value)
    Console().print(table)


if __name__ == "__main__":
    app()
