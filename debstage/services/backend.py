# SPDX-License-Identifier: MIT
"""Drive the packaging backend (dpkg-deb) over a staged tree.

The backend's exit status is not trusted on its own: a build only counts
once the expected archive exists and `--info` can read it back.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from debstage.core.package import BuildArtifact, StagedTree
from debstage.core.result import Err, Ok, Result
from debstage.output.console import ConsoleProtocol
from debstage.platform.process import CommandRunner, DefaultCommandRunner, ProcessError
from debstage.services.errors import PackagingError

__all__ = ["DPKG_DEB", "Backend", "BackendDriver"]


@dataclass(frozen=True, slots=True)
class Backend:
    """Command-line contract of a packaging backend."""

    tool: str
    extension: str
    install_command: str
    remove_command: str

    def artifact_path(self, tree: StagedTree) -> Path:
        return tree.root.with_name(f"{tree.root.name}.{self.extension}")

    def build_argv(self, tree: StagedTree) -> list[str]:
        # root:root ownership inside the archive without running as root.
        return [self.tool, "--build", "--root-owner-group", str(tree.root)]

    def info_argv(self, artifact: Path) -> list[str]:
        return [self.tool, "--info", str(artifact)]


DPKG_DEB = Backend(
    tool="dpkg-deb",
    extension="deb",
    install_command="sudo dpkg -i {artifact}",
    remove_command="sudo dpkg -r {name}",
)


class BackendDriver:
    def __init__(
        self,
        *,
        workdir: Path,
        console: ConsoleProtocol,
        runner: CommandRunner | None = None,
        backend: Backend = DPKG_DEB,
    ) -> None:
        self._workdir = workdir
        self._console = console
        self._runner = runner or DefaultCommandRunner()
        self._backend = backend

    @property
    def backend(self) -> Backend:
        return self._backend

    def build(self, tree: StagedTree) -> Result[BuildArtifact, PackagingError]:
        """Build the archive, verify it exists, and show its metadata."""
        backend = self._backend
        artifact = backend.artifact_path(tree)

        # An archive left by an earlier run must not pass for this build's output.
        try:
            artifact.unlink(missing_ok=True)
        except OSError as e:
            self._console.error(f"Could not remove previous {artifact.name}: {e}")
            return Err(
                PackagingError(
                    kind="backend_invocation_failure",
                    message=f"Could not remove previous {artifact.name}: {e}",
                )
            )

        self._console.info(f"Building .{backend.extension} package...")
        built = self._invoke(backend.build_argv(tree), capture=False)
        if isinstance(built, Err):
            return built

        if not artifact.is_file():
            self._console.error("Package build failed!")
            return Err(
                PackagingError(
                    kind="artifact_not_produced",
                    message=f"{backend.tool} did not produce {artifact.name}",
                )
            )

        self._console.info(f"Package built successfully: {artifact.name}")
        info = self._invoke(backend.info_argv(artifact), capture=True)
        if isinstance(info, Err):
            return info

        name = tree.descriptor.name
        self._console.newline()
        self._console.print("Package information:")
        self._console.print(info.value.rstrip("\n"))
        self._console.newline()
        self._console.print("To install the package, run:")
        self._console.print("  " + backend.install_command.format(artifact=artifact.name, name=name))
        self._console.newline()
        self._console.print("To remove the package, run:")
        self._console.print("  " + backend.remove_command.format(artifact=artifact.name, name=name))

        return Ok(BuildArtifact(path=artifact, info=info.value))

    def _invoke(self, argv: list[str], *, capture: bool) -> Result[str, PackagingError]:
        try:
            proc = self._runner.run(argv, capture=capture, cwd=self._workdir)
        except OSError as e:
            self._console.error(f"Could not run {argv[0]}: {e}")
            return Err(
                PackagingError(
                    kind="backend_invocation_failure",
                    message=f"Could not run {argv[0]}: {e}",
                )
            )

        if proc.returncode != 0:
            error = ProcessError.from_completed(proc)
            self._console.error(f"Backend command failed: {error}")
            if error.stderr:
                self._console.print(error.stderr)
            return Err(
                PackagingError(
                    kind="backend_invocation_failure",
                    message=str(error),
                )
            )

        return Ok(proc.stdout or "")
