"""Tests for git helpers."""

import subprocess
from unittest.mock import patch

from shub.utils.git import clone_repo, repo_exists


class TestRepoExists:
    """Tests for repo_exists."""

    def test_directory(self, tmp_path) -> None:
        assert repo_exists(str(tmp_path)) is True

    def test_missing_or_file(self, tmp_path) -> None:
        (tmp_path / "file").write_text("")
        assert repo_exists(str(tmp_path / "missing")) is False
        assert repo_exists(str(tmp_path / "file")) is False


class TestCloneRepo:
    """Tests for clone_repo with git mocked out."""

    def test_creates_owner_directory(self, tmp_path) -> None:
        target = tmp_path / "kafji" / "shub"
        with patch("shub.utils.git.subprocess.run") as run:
            assert clone_repo("git@github.com:kafji/shub.git", str(target)) is True

        assert (tmp_path / "kafji").is_dir()
        assert run.call_args.args[0] == ["git", "clone", "git@github.com:kafji/shub.git", str(target)]

    def test_git_failure(self, tmp_path) -> None:
        error = subprocess.CalledProcessError(128, ["git", "clone"], stderr="fatal: not found")
        with patch("shub.utils.git.subprocess.run", side_effect=error):
            assert clone_repo("url", str(tmp_path / "x")) is False

    def test_git_missing(self, tmp_path) -> None:
        with patch("shub.utils.git.subprocess.run", side_effect=FileNotFoundError):
            assert clone_repo("url", str(tmp_path / "x")) is False
