from __future__ import annotations

from pathlib import Path

import pytest

from debstage.core.package import FileManifestEntry
from debstage.core.result import Err, Ok
from debstage.output.console import MockConsole
from debstage.services.sources import SourceValidator


def test_all_present_succeeds_silently(sources: Path, manifest: list[FileManifestEntry]) -> None:
    console = MockConsole()

    result = SourceValidator(workdir=sources, console=console).verify(manifest)

    assert result == Ok(None)
    assert console.outputs == []


@pytest.mark.parametrize("removed", [[0], [1], [2, 3], [0, 1, 2, 3]])
def test_reports_every_missing_file(
    sources: Path,
    manifest: list[FileManifestEntry],
    removed: list[int],
) -> None:
    for i in removed:
        (sources / manifest[i].source).unlink()
    console = MockConsole()

    result = SourceValidator(workdir=sources, console=console).verify(manifest)

    assert isinstance(result, Err)
    assert result.error.kind == "missing_source_file"
    listed = [m.removeprefix("  - ") for m in console.messages if m.startswith("  - ")]
    assert listed == [str(manifest[i].source) for i in removed]


def test_directory_does_not_count_as_source(
    sources: Path, manifest: list[FileManifestEntry]
) -> None:
    conf = sources / manifest[1].source
    conf.unlink()
    conf.mkdir()

    validator = SourceValidator(workdir=sources, console=MockConsole())

    assert validator.missing(manifest) == [manifest[1].source]


def test_verify_does_not_create_anything(tmp_path: Path, manifest: list[FileManifestEntry]) -> None:
    SourceValidator(workdir=tmp_path, console=MockConsole()).verify(manifest)

    assert list(tmp_path.iterdir()) == []
