"""Switch orchestrator: rule, tree scan, restore, commit."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from bunch.config import SwitchConfig
from bunch.errors import RepositoryPathError
from bunch.models import FileChange
from bunch.restore import restore_files
from bunch.rules import resolve_rule
from bunch.tree import find_affected_origins
from bunch.vcs.git import commit_changes

logger = logging.getLogger("bunch.pipeline")

Committer = Callable[[Path, set[FileChange], str], str | None]


@dataclass
class SwitchResult:
    suffixes: list[str]
    origins: set[Path] = field(default_factory=set)
    changes: set[FileChange] = field(default_factory=set)
    commit: str | None = None

    @property
    def origin_suffix(self) -> str:
        return self.suffixes[0]

    @property
    def target(self) -> str:
        return self.suffixes[-1]


def donor_priority(suffixes: list[str]) -> list[str]:
    """Donor suffixes to try for each origin, target branch first."""
    return list(reversed(suffixes[1:]))


def run_switch(
    config: SwitchConfig, committer: Committer | None = None,
) -> SwitchResult:
    """Switch the tree at ``config.repo_path`` and commit the result."""
    suffixes = resolve_rule(config.rule, config.repo_path)
    result = SwitchResult(suffixes=suffixes)
    logger.info(
        f"Switching {config.repo_path} from '{result.origin_suffix}' "
        f"to '{result.target}' (rule {'_'.join(suffixes)})"
    )

    root = config.repo_path
    if not root.is_dir():
        raise RepositoryPathError(
            f"Repository directory with branch is expected: {root}"
        )

    donors = donor_priority(suffixes)
    result.origins = find_affected_origins(root, donors)
    result.changes = restore_files(result.origin_suffix, donors, result.origins)

    title = config.title_for(result.target)
    commit = committer or commit_changes
    result.commit = commit(root, result.changes, title)
    return result
