"""Errors raised while switching a tree to another branch variant."""

from __future__ import annotations


class BunchError(Exception):
    """Base class for every error the CLI reports to the user."""


class RuleResolutionError(BunchError):
    """Raised when a branches rule can't be turned into a suffix list."""


class RepositoryPathError(BunchError):
    """Raised when the repository path is missing or not a directory."""


class UnsupportedTargetError(BunchError):
    """Raised when an origin or patch path is a directory."""


class CollisionError(BunchError):
    """Raised when the branch copy of an origin file already exists."""


class InvariantViolation(BunchError):
    """Raised on internal states that should be unreachable."""


class CommitError(BunchError):
    """Raised when recording the changes in git fails."""
