"""Commit a change set with the git command line."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from bunch.errors import CommitError
from bunch.models import ChangeType, FileChange

logger = logging.getLogger("bunch.git")

PATHSPEC_STDIN = ["--pathspec-from-file=-", "--pathspec-file-nul"]


def _run_git(
    repo_path: Path, args: Sequence[str], stdin: str | None = None,
) -> str:
    cmd = ["git", *args]
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            cwd=str(repo_path),
            input=stdin,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise CommitError(f"Failed to run git: {e}") from e
    if result.returncode != 0:
        raise CommitError(
            f"git {args[0]} failed ({result.returncode}):\n{result.stderr.strip()}"
        )
    return result.stdout


def _nul_joined(paths: Sequence[str]) -> str:
    return "\0".join(paths)


def _relative(repo_path: Path, path: Path) -> str:
    return os.path.relpath(Path(path).absolute(), Path(repo_path).absolute())


def _paths_of(
    repo_path: Path, changes: Iterable[FileChange], kinds: set[ChangeType],
) -> list[str]:
    return sorted(
        _relative(repo_path, change.path) for change in changes
        if change.kind in kinds
    )


def commit_changes(
    repo_path: Path, changes: set[FileChange], message: str,
) -> str | None:
    """Stage *changes* and commit them as one commit.

    Returns the sha of the new commit, or None if there was nothing to
    commit. Raises CommitError if any git command fails.
    """
    if not changes:
        logger.warning("No changes to commit")
        return None

    staged = _paths_of(repo_path, changes, {ChangeType.ADD, ChangeType.MODIFY})
    removed = _paths_of(repo_path, changes, {ChangeType.REMOVE})

    # Paths go through stdin so large trees stay under the command line limit.
    if staged:
        _run_git(repo_path, ["add", *PATHSPEC_STDIN], _nul_joined(staged))
    if removed:
        _run_git(
            repo_path,
            ["rm", "--cached", "--quiet", "--ignore-unmatch", *PATHSPEC_STDIN],
            _nul_joined(removed),
        )
    _run_git(repo_path, ["commit", "--quiet", "-m", message])

    sha = _run_git(repo_path, ["rev-parse", "HEAD"]).strip()
    logger.info(f"Committed {len(changes)} change(s) as {sha[:10]}")
    return sha
