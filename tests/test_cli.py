"""
test_cli.py - Typer CLI commands (scan, diff-lines, languages).
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from anot.cli import app

from conftest import git, requires_git

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small source tree; the working directory is moved into it."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("# TODO: py\nx = 1  # note: inline\n")
    (tmp_path / "src" / "lib.rs").write_text("// hypothesis: rust\nfn main() {}\n")
    (tmp_path / "README.md").write_text("todo: not scanned\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestScanCommand:

    def test_directory_json(self, project):
        result = runner.invoke(app, ["scan", "src"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["count"] == 3
        assert data["files_scanned"] == 2
        assert data["errors"] == []
        assert {(Path(a["file"]).name, a["line"], a["tag"]) for a in data["annotations"]} == {
            ("app.py", 1, "todo"),
            ("app.py", 2, "note"),
            ("lib.rs", 1, "hypothesis"),
        }

    def test_tags_option(self, project):
        result = runner.invoke(app, ["scan", "src", "--tags", "note"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [a["tag"] for a in data["annotations"]] == ["note"]

    def test_single_file(self, project):
        result = runner.invoke(app, ["scan", "src/app.py", "--tags", "todo,note"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [(a["line"], a["tag"], a["comment"]) for a in data["annotations"]] == [
            (1, "todo", "# TODO: py"),
            (2, "note", "# note: inline"),
        ]

    def test_single_unsupported_file_fails(self, project):
        result = runner.invoke(app, ["scan", "README.md"])
        assert result.exit_code == 1

    def test_missing_path_fails(self, project):
        result = runner.invoke(app, ["scan", "nope"])
        assert result.exit_code == 1

    def test_empty_tags_rejected(self, project):
        result = runner.invoke(app, ["scan", "src", "--tags", " , "])
        assert result.exit_code == 1

    def test_humanize(self, project):
        result = runner.invoke(app, ["scan", "src", "--humanize"])
        assert result.exit_code == 0, result.output
        assert "app.py" in result.output

    def test_config_file_in_cwd(self, project):
        (project / "anot_config.json").write_text(json.dumps({"tags": ["hypothesis"]}))
        result = runner.invoke(app, ["scan", "src"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [a["tag"] for a in data["annotations"]] == ["hypothesis"]

    def test_explicit_config_overridden_by_option(self, project, tmp_path):
        cfg = tmp_path / "custom.json"
        cfg.write_text(json.dumps({"tags": ["hypothesis"], "workers": 2}))
        result = runner.invoke(app, ["scan", "src", "--config", str(cfg), "--tags", "todo"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [a["tag"] for a in data["annotations"]] == ["todo"]

    def test_missing_config_file_fails(self, project):
        result = runner.invoke(app, ["scan", "src", "--config", "missing.json"])
        assert result.exit_code == 1

    def test_directory_with_unreadable_file_fails_after_reporting(self, project):
        (project / "src" / "broken.py").write_bytes(b"# todo \xff\n")
        result = runner.invoke(app, ["scan", "src"])
        assert result.exit_code == 1

    @requires_git
    def test_diff_only(self, tmp_path, monkeypatch):
        repo = tmp_path / "repo"
        repo.mkdir()
        git(repo, "init")
        (repo / "a.py").write_text("# todo: old\n")
        git(repo, "add", "a.py")
        git(repo, "commit", "-m", "initial")
        (repo / "a.py").write_text("# todo: old\n# todo: new\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["scan", str(repo), "--diff-only"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [(a["line"], a["comment"]) for a in data["annotations"]] == [(2, "# todo: new")]


class TestDiffLinesCommand:

    @requires_git
    def test_reports_sorted_lines(self, git_repo, monkeypatch):
        fp = git_repo / "test.txt"
        fp.write_text("line 1\nline 2\nline 3\n")
        git(git_repo, "add", "test.txt")
        git(git_repo, "commit", "-m", "initial")
        fp.write_text("line 1\nmodified line 2\nline 3\nnew line 4\nnew line 5\n")
        monkeypatch.chdir(git_repo)

        result = runner.invoke(app, ["diff-lines", "test.txt"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["lines"] == [2, 4, 5]

    def test_unavailable_diff_is_empty(self, no_repo_dir, monkeypatch):
        (no_repo_dir / "a.py").write_text("x = 1\n")
        monkeypatch.chdir(no_repo_dir)
        result = runner.invoke(app, ["diff-lines", "a.py"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["lines"] == []


class TestLanguagesCommand:

    def test_lists_extensions(self):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0
        for ext in (".py", ".rs", ".js", ".ts"):
            assert ext in result.output
