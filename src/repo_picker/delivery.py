"""Hand the chosen repository to the outer shell.

The selection is written as one line to a known file; a shell function
reads it after the picker exits and changes directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def write_selection(path: Path, identifier: str) -> None:
    """Write ``identifier`` as a single line to ``path``.

    The identifier is encoded with the filesystem encoding, so directory
    names that are not valid UTF-8 come back out as the original bytes.

    Raises:
        OSError: If the file or its parent directory cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(os.fsencode(identifier) + b"\n")
    logger.debug("wrote selection %r to %s", identifier, path)


def read_selection(path: Path) -> str | None:
    """Read back a delivered selection, or None if there is none."""
    try:
        value = os.fsdecode(path.read_bytes()).strip()
    except FileNotFoundError:
        return None
    return value or None


def clear_selection(path: Path) -> None:
    """Remove a stale selection so an old choice is never reused."""
    path.unlink(missing_ok=True)
