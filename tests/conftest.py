"""Pytest configuration and fixtures."""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

# Allow running from repo root without installing the package.
sys.path.insert(0, str(Path(__file__).parent.parent))

from anot.registry import LanguageRegistry

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def git(repo: Path, *args: str) -> None:
    """Run a git command in *repo* with a throwaway identity."""
    subprocess.run(
        [
            "git",
            "-c", "user.name=anot tests",
            "-c", "user.email=tests@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def registry() -> LanguageRegistry:
    return LanguageRegistry()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An empty git repository in a temporary directory."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    return repo


@pytest.fixture
def no_repo_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A directory git will not treat as part of any repository."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    plain = tmp_path / "plain"
    plain.mkdir()
    return plain
