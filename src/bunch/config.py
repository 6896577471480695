"""Settings for a single switch run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

RULE_FILE = ".bunch"
DEFAULT_COMMIT_TITLE = "==== switch {target} ===="
TARGET_PLACEHOLDER = "{target}"


@dataclass
class SwitchConfig:
    repo_path: Path
    rule: str
    commit_title: str = DEFAULT_COMMIT_TITLE

    def __post_init__(self) -> None:
        self.repo_path = Path(self.repo_path)

    def title_for(self, target: str) -> str:
        """Render the commit title for the given target suffix."""
        return self.commit_title.replace(TARGET_PLACEHOLDER, target)
