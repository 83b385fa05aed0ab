"""Filesystem helpers for staging package content."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "copy_with_mode"]


def atomic_write_text(
    path: Path,
    content: str,
    *,
    mode: int = 0o644,
    encoding: str = "utf-8",
) -> None:
    """Write text to path atomically using temp file + replace.

    The final file carries exactly `mode`, regardless of umask.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def copy_with_mode(src: Path, dst: Path, mode: int) -> None:
    """Copy file content (not metadata) and set `mode` on the destination."""
    shutil.copyfile(src, dst)
    os.chmod(dst, mode)
