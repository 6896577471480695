"""Resolve a branches rule into an ordered list of file suffixes.

A rule is a `_`-separated list of suffixes, origin branch first:
``173_as31_as32`` switches a tree checked out as ``173`` to ``as32``, using
``as31`` files where no ``as32`` file exists.

When only the target suffix is given, the rule is looked up in the
``.bunch`` file at the repository root. Its first non-empty line names the
branch the tree is currently on; every following line is a rule stored
from the point of view of the branch it starts with.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from bunch.config import RULE_FILE
from bunch.errors import RuleResolutionError

logger = logging.getLogger("bunch.rules")

SEPARATOR = "_"
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_rule(rule: str) -> list[str]:
    """Split a rule on `_`, rejecting empty suffixes."""
    suffixes = rule.split(SEPARATOR)
    if any(not suffix for suffix in suffixes):
        raise RuleResolutionError(
            f"There should be a target branch in pattern: '{rule}'"
        )
    return suffixes


def read_history(repo_path: Path) -> list[str] | None:
    """Return the stripped, non-empty lines of the rule file.

    Returns None if the repository has no rule file.
    """
    path = Path(repo_path) / RULE_FILE
    if not path.is_file():
        return None
    text = path.read_text(encoding="utf-8", errors="replace")
    lines = LINE_BREAK.split(text)
    return [line.strip() for line in lines if line.strip()]


def read_rule_from_file(target: str, repo_path: Path) -> str:
    """Build the rule that switches the current branch to *target*.

    The stored rule for *target* is extended with the current branch and
    reversed, so the result starts with the current (origin) branch and
    ends with the target.
    """
    rule_file = (Path(repo_path) / RULE_FILE).resolve()
    history = read_history(repo_path)
    if history is None:
        logger.error(
            f"Can't build rule for restore branch from '{target}'. "
            f"File '{rule_file}' doesn't exist"
        )
        return target

    if not history:
        raise RuleResolutionError(
            f"First line in '{rule_file}' should contain current branch name"
        )

    current = history[0]
    if current == target:
        return target

    requested = next(
        (line for line in history
         if line == target or line.startswith(target + SEPARATOR)),
        None,
    )
    if requested is None:
        raise RuleResolutionError(
            f"Can't find rule for '{target}' in file '{rule_file}'"
        )

    target_to_current = f"{requested}{SEPARATOR}{current}".split(SEPARATOR)
    rule = SEPARATOR.join(reversed(target_to_current))
    logger.debug(f"Rule for '{target}' from {RULE_FILE}: {rule}")
    return rule


def resolve_rule(rule: str, repo_path: Path) -> list[str]:
    """Turn a user-supplied rule into suffixes, origin first.

    Raises RuleResolutionError unless at least two suffixes result.
    """
    suffixes = split_rule(rule)
    if len(suffixes) > 1:
        return suffixes

    suffixes = split_rule(read_rule_from_file(suffixes[0], repo_path))
    if len(suffixes) < 2:
        raise RuleResolutionError(
            "Only target branch is given in pattern. Do nothing."
        )
    return suffixes
