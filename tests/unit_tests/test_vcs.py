"""Tests for git helpers."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from geminicode_cli.vcs import VcsError, find_project_root, get_diff


class TestProjectRootDetection:
    """Test project root detection via .git directory."""

    def test_find_project_root_with_git(self, tmp_path: Path) -> None:
        """Test that project root is found when .git directory exists."""
        project_root = tmp_path / "my-project"
        project_root.mkdir()
        (project_root / ".git").mkdir()

        subdir = project_root / "src" / "components"
        subdir.mkdir(parents=True)

        assert find_project_root(subdir) == project_root.resolve()

    def test_find_project_root_no_git(self, tmp_path: Path) -> None:
        """Test that None is returned when no .git directory exists."""
        no_git_dir = tmp_path / "no-git"
        no_git_dir.mkdir()

        assert find_project_root(no_git_dir) is None

    def test_find_project_root_nested_git(self, tmp_path: Path) -> None:
        """Test that nearest .git directory is found (not parent repos)."""
        outer_repo = tmp_path / "outer"
        outer_repo.mkdir()
        (outer_repo / ".git").mkdir()

        inner_repo = outer_repo / "inner"
        inner_repo.mkdir()
        (inner_repo / ".git").mkdir()

        assert find_project_root(inner_repo) == inner_repo.resolve()


class TestGetDiff:
    """Tests for get_diff."""

    def test_working_tree_diff(self, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="diff --git a/x b/x\n", stderr="")
        with patch("geminicode_cli.vcs.subprocess.run", return_value=completed) as mock_run:
            assert get_diff(tmp_path) == "diff --git a/x b/x\n"

        args = mock_run.call_args.args[0]
        assert args == ["git", "diff", "--no-color"]
        assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)

    def test_staged_base_and_paths(self) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("geminicode_cli.vcs.subprocess.run", return_value=completed) as mock_run:
            assert get_diff(".", staged=True, base="main", paths=["src", "tests"]) == ""

        assert mock_run.call_args.args[0] == [
            "git",
            "diff",
            "--no-color",
            "--cached",
            "main",
            "--",
            "src",
            "tests",
        ]

    def test_git_error(self) -> None:
        completed = subprocess.CompletedProcess(
            args=[], returncode=128, stdout="", stderr="fatal: not a git repository\n"
        )
        with patch("geminicode_cli.vcs.subprocess.run", return_value=completed):
            with pytest.raises(VcsError, match="not a git repository"):
                get_diff(".")

    def test_git_missing(self) -> None:
        with patch("geminicode_cli.vcs.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(VcsError, match="not installed"):
                get_diff(".")

    def test_git_timeout(self) -> None:
        with patch(
            "geminicode_cli.vcs.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git diff", timeout=1),
        ):
            with pytest.raises(VcsError, match="timed out"):
                get_diff(".", timeout=1)

    def test_missing_working_dir(self, tmp_path: Path) -> None:
        with patch("geminicode_cli.vcs.subprocess.run") as mock_run:
            with pytest.raises(VcsError, match="Working directory not found"):
                get_diff(tmp_path / "nope")
        mock_run.assert_not_called()
