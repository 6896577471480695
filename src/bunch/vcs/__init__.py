"""Recording switch results in version control."""

from bunch.vcs.git import commit_changes

__all__ = ["commit_changes"]
