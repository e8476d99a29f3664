"""Note file reading and writing."""

import os
import tempfile
from contextlib import suppress
from pathlib import Path

from vocab_notes.utils.logging import get_logger

logger = get_logger(__name__)


def write_text_atomic(path: str | Path, content: str) -> None:
    """Replace ``path`` with ``content`` in one rename.

    The text goes to a hidden sibling file first, so Obsidian (or a crash)
    never sees a half-written note. The sibling is removed if anything fails.
    """
    path = Path(path)
    fd, staging_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    staging = Path(staging_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        staging.replace(path)
    except OSError as e:
        with suppress(OSError):
            staging.unlink()
        logger.error("note_write_failed", path=str(path), error=str(e))
        raise


def read_text_if_exists(path: str | Path) -> str | None:
    """Return the UTF-8 text of ``path``, or None when the file does not exist."""
    path = Path(path)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")
