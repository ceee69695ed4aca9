"""Repository discovery.

Walks a root directory and collects every directory that contains a marker
entry (``.git`` by default). Unreadable directories are skipped.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .types import Item

logger = logging.getLogger(__name__)

DEFAULT_MARKER = ".git"


def _log_walk_error(error: OSError) -> None:
    logger.debug("skipping unreadable directory %s: %s", error.filename, error.strerror)


def is_repository(path: Path, marker: str = DEFAULT_MARKER) -> bool:
    """Check whether ``path`` holds the marker entry (file or directory)."""
    try:
        return (path / marker).exists()
    except OSError:
        return False


def find_repositories(
    root: Path | str,
    marker: str = DEFAULT_MARKER,
    include_hidden: bool = False,
    max_depth: int | None = None,
    exclude: Iterable[str] = (),
) -> list[Item]:
    """Find repositories under ``root``.

    Args:
        root: Directory to scan.
        marker: Entry whose presence tags a directory as a repository.
        include_hidden: Descend into dot-directories too.
        max_depth: Deepest level to descend below ``root`` (None for no limit).
        exclude: Directory names never descended into.

    Returns:
        Items in walk order (directory names sorted), named after their folder.

    Raises:
        FileNotFoundError: If ``root`` does not exist or is not a directory.
    """
    root = Path(root).expanduser()
    if not root.is_dir():
        raise FileNotFoundError(f"Not a directory: {root}")
    root = root.resolve()

    skip = set(exclude)
    skip.add(marker)
    found: list[Item] = []

    for dirpath, dirnames, _filenames in os.walk(root, onerror=_log_walk_error):
        base = Path(dirpath)
        if is_repository(base, marker):
            found.append(Item(name=base.name or str(base), path=str(base)))

        depth = len(base.relative_to(root).parts)
        if max_depth is not None and depth >= max_depth:
            dirnames[:] = []
            continue

        dirnames[:] = sorted(
            (
                name
                for name in dirnames
                if name not in skip and (include_hidden or not name.startswith("."))
            ),
            key=str.lower,
        )

    logger.debug("found %d repositories under %s", len(found), root)
    return found
