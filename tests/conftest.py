"""Shared test fixtures."""

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """An empty directory standing in for a repository checkout."""
    path = tmp_path / "repo"
    path.mkdir()
    return path


@pytest.fixture
def make_tree(repo: Path) -> Callable[[dict[str, str]], Path]:
    """Create files under the repo from a {relative path: content} mapping."""

    def make(files: dict[str, str]) -> Path:
        for name, content in files.items():
            path = repo / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return repo

    return make


@pytest.fixture
def git_repo(repo: Path) -> Path:
    """A real git repository, skipped if git isn't installed."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)

    git("init", "--quiet")
    git("config", "user.email", "bunch@example.com")
    git("config", "user.name", "Bunch Tests")
    git("config", "commit.gpgsign", "false")
    return repo
