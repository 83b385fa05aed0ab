"""Lay out the package tree that dpkg-deb builds from.

The tree is never wiped first: directories are re-created idempotently and
files are overwritten, so re-running after an interrupted build is safe. Any
extra file left in the tree by hand survives into the next build.
"""

from __future__ import annotations

from pathlib import Path

from debstage.core.package import (
    DATA_MODE,
    EXECUTABLE_MODE,
    FileManifestEntry,
    PackageDescriptor,
    StagedTree,
)
from debstage.core.result import Err, Ok, Result
from debstage.output.console import ConsoleProtocol
from debstage.platform.files import atomic_write_text, copy_with_mode
from debstage.services.errors import PackagingError
from debstage.services.hooks import HOOK_RENDERERS, render_control


class PackageTreeBuilder:
    def __init__(self, *, workdir: Path, console: ConsoleProtocol) -> None:
        self._workdir = workdir
        self._console = console

    def tree_for(self, descriptor: PackageDescriptor) -> StagedTree:
        return StagedTree(root=self._workdir / descriptor.tree_name, descriptor=descriptor)

    def stage(
        self,
        descriptor: PackageDescriptor,
        manifest: list[FileManifestEntry],
    ) -> Result[StagedTree, PackagingError]:
        """Populate `<name>_<version>_<arch>/` with files, control record and hooks."""
        tree = self.tree_for(descriptor)
        self._console.info(f"Creating package structure in {tree.root.name}...")

        try:
            self._create_directories(tree, manifest)
            self._console.info("Copying files...")
            for entry in manifest:
                copy_with_mode(
                    self._workdir / entry.source,
                    tree.path_for(entry.destination),
                    entry.mode,
                )
            self._write_metadata(tree)
        except OSError as e:
            path = e.filename or tree.root
            self._console.error(f"Failed to stage package tree at {path}: {e.strerror or e}")
            return Err(
                PackagingError(
                    kind="staging_failure",
                    message=f"Failed to stage package tree: {e}",
                )
            )

        self._console.info("Package structure created successfully.")
        return Ok(tree)

    def _create_directories(self, tree: StagedTree, manifest: list[FileManifestEntry]) -> None:
        dirs = [tree.metadata_dir]
        dirs += [tree.path_for(entry.destination).parent for entry in manifest]
        for d in dirs:
            d.mkdir(parents=True, exist_ok=True)

    def _write_metadata(self, tree: StagedTree) -> None:
        descriptor = tree.descriptor
        atomic_write_text(
            tree.metadata_dir / "control",
            render_control(descriptor),
            mode=DATA_MODE,
        )
        for slot, render in HOOK_RENDERERS.items():
            atomic_write_text(
                tree.metadata_dir / slot,
                render(descriptor.name),
                mode=EXECUTABLE_MODE,
            )
