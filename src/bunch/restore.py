"""Replace origin files with their branch patches, keeping a branch copy.

For every origin file the current content is moved aside to
``<origin>.<origin suffix>`` and the highest-priority existing patch takes
its place. A whitespace-only patch means the target branch has no such
file, so the origin is left deleted.

Files are changed on disk as each origin is processed. An error stops the
run and leaves the files already processed as they are.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path

from bunch.errors import CollisionError, InvariantViolation, UnsupportedTargetError
from bunch.models import ChangeType, FileChange

logger = logging.getLogger("bunch.restore")


def patch_file(origin: Path, suffix: str) -> Path:
    """Return the path of *origin*'s patch for *suffix*."""
    return origin.parent / f"{origin.name}.{suffix}"


def _is_removal(patch: Path) -> bool:
    text = patch.read_text(encoding="utf-8", errors="replace")
    return not text.strip()


def _select_donor(origin: Path, donor_suffixes: Sequence[str]) -> Path:
    for suffix in donor_suffixes:
        candidate = patch_file(origin, suffix)
        if candidate.exists():
            return candidate
    raise InvariantViolation(
        f"No patch file found for {origin} with suffixes {', '.join(donor_suffixes)}"
    )


def restore_file(
    origin: Path, origin_suffix: str, donor_suffixes: Sequence[str],
) -> list[FileChange]:
    """Switch a single origin file. Returns the changes made."""
    changes: list[FileChange] = []

    if origin.exists():
        if origin.is_dir():
            raise UnsupportedTargetError(
                f"Patch specific directories are not supported: {origin}"
            )

        branch_copy = patch_file(origin, origin_suffix)
        if branch_copy.exists():
            raise CollisionError(
                "Can't store copy of the origin file, because branch file "
                f"already exists: {branch_copy}"
            )
        shutil.copy2(origin, branch_copy)
        changes.append(FileChange(ChangeType.ADD, branch_copy))
        logger.debug(f"Stored branch copy {branch_copy}")

        origin.unlink()
        pending = ChangeType.MODIFY
    else:
        pending = ChangeType.ADD

    donor = _select_donor(origin, donor_suffixes)
    if donor.is_dir():
        raise UnsupportedTargetError(
            f"Patch specific directories are not supported: {donor}"
        )

    if not _is_removal(donor):
        shutil.copy2(donor, origin)
        changes.append(FileChange(pending, origin))
        logger.info(f"{pending.value}: {origin} <- {donor.name}")
        return changes

    if pending == ChangeType.ADD:
        # Nothing existed and the branch has nothing to add.
        logger.debug(f"Skipping {origin}: absent on both branches")
    elif pending == ChangeType.MODIFY:
        changes.append(FileChange(ChangeType.REMOVE, origin))
        logger.info(f"remove: {origin} (removed by {donor.name})")
    else:
        raise InvariantViolation(
            f"REMOVE isn't expected as modification of origin file {origin}"
        )
    return changes


def restore_files(
    origin_suffix: str,
    donor_suffixes: Sequence[str],
    origins: Iterable[Path],
) -> set[FileChange]:
    """Switch every origin file, one at a time.

    *donor_suffixes* must be ordered by priority, highest first.
    Returns the set of changes for the commit.
    """
    changed: set[FileChange] = set()
    for origin in sorted(origins):
        changed.update(restore_file(origin, origin_suffix, donor_suffixes))
    return changed
