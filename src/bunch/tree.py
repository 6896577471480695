"""Walk a source tree and find origin files that have branch patches."""

from __future__ import annotations

import logging
import os
from collections.abc import Collection, Iterator
from pathlib import Path

logger = logging.getLogger("bunch.tree")


def _is_skipped(directory: Path) -> bool:
    # Build output copies of patch files are not sources.
    return directory.name == "resources" and directory.parent.name == "build"


def walk_tree(root: Path) -> Iterator[Path]:
    """Yield every directory and file under *root*, top-down.

    ``build/resources`` directories are neither yielded nor entered.
    """
    root = Path(root)
    if _is_skipped(root):
        return

    for dirpath, dirnames, filenames in os.walk(root):
        parent = Path(dirpath)
        kept = []
        for name in sorted(dirnames):
            child = parent / name
            if _is_skipped(child):
                logger.debug(f"Skipping build output: {child}")
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in kept:
            yield parent / name
        for name in sorted(filenames):
            yield parent / name


def extension(path: Path) -> str:
    """Return the text after the last dot in the name, or ''."""
    name = path.name
    if "." not in name:
        return ""
    return name.rpartition(".")[2]


def origin_of(path: Path) -> Path:
    """Strip the last extension from a patch file path."""
    return path.parent / path.name.rpartition(".")[0]


def find_affected_origins(root: Path, donor_suffixes: Collection[str]) -> set[Path]:
    """Find the distinct origin files that have at least one donor patch."""
    donors = set(donor_suffixes)
    origins: set[Path] = set()
    for entry in walk_tree(root):
        if extension(entry) in donors:
            origins.add(origin_of(entry))
    logger.info(f"Found {len(origins)} origin file(s) with patches")
    return origins
