"""File I/O operations for bundling."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

BOM = "\ufeff"


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole text file, dropping a leading byte order mark."""
    with path.open(encoding=encoding, newline="") as handle:
        text = handle.read()
    return text[1:] if text.startswith(BOM) else text


def file_mode(path: Path) -> int:
    """Return the permission bits of an existing file."""
    return stat.S_IMODE(path.stat().st_mode)


def atomic_write_text(
    path: Path, text: str, mode: int = 0o644, encoding: str = "utf-8"
) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
        encoding: Text encoding
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
