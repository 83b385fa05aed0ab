from __future__ import annotations

from pathlib import Path

from debstage.core.package import FileManifestEntry
from debstage.core.result import Err, Ok, Result
from debstage.output.console import ConsoleProtocol
from debstage.services.errors import PackagingError


class SourceValidator:
    """Confirm every manifest source exists before anything is written."""

    def __init__(self, *, workdir: Path, console: ConsoleProtocol) -> None:
        self._workdir = workdir
        self._console = console

    def missing(self, manifest: list[FileManifestEntry]) -> list[Path]:
        return [e.source for e in manifest if not (self._workdir / e.source).is_file()]

    def verify(self, manifest: list[FileManifestEntry]) -> Result[None, PackagingError]:
        """Fail with every missing source listed; silent on success."""
        missing = self.missing(manifest)
        if not missing:
            return Ok(None)

        self._console.error("Missing required source files:")
        for path in missing:
            self._console.print(f"  - {path}")
        return Err(
            PackagingError(
                kind="missing_source_file",
                message="Missing required source files: " + ", ".join(str(p) for p in missing),
                hint=f"Run from the directory containing the build outputs ({self._workdir})",
            )
        )
