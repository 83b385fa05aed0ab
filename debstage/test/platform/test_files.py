from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from debstage.platform.files import atomic_write_text, copy_with_mode


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


def test_atomic_write_text_creates_parent_dirs_and_sets_mode(tmp_path: Path) -> None:
    path = tmp_path / "DEBIAN" / "postinst"
    atomic_write_text(path, "#!/bin/bash\n", mode=0o755)

    assert path.read_text(encoding="utf-8") == "#!/bin/bash\n"
    assert _mode(path) == 0o755


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "control"
    path.write_text("old", encoding="utf-8")
    path.chmod(0o600)

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"
    assert _mode(path) == 0o644


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "control"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload")

    assert list(path.parent.glob(f".{path.name}.*.tmp")) == []


def test_copy_with_mode_ignores_source_permissions(tmp_path: Path) -> None:
    src = tmp_path / "opennic-up"
    src.write_bytes(b"#!/bin/sh\n")
    src.chmod(0o700)
    dst = tmp_path / "out"

    copy_with_mode(src, dst, 0o644)

    assert dst.read_bytes() == b"#!/bin/sh\n"
    assert _mode(dst) == 0o644


def test_copy_with_mode_missing_source_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        copy_with_mode(tmp_path / "nope", tmp_path / "out", 0o644)
