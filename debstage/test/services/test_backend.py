from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from debstage.core.package import PackageDescriptor, StagedTree
from debstage.core.result import Err, Ok
from debstage.output.console import MockConsole
from debstage.services.backend import DPKG_DEB, BackendDriver

INFO_OUTPUT = " new Debian package, version 2.0.\n Package: opennic-up\n"


@dataclass
class FakeDpkgDeb:
    """Stands in for dpkg-deb: `--build` may write `<tree>.deb`, `--info` prints."""

    build_exit: int = 0
    produce: bool = True
    info_exit: int = 0
    calls: list[list[str]] = field(default_factory=list)

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(args))
        if args[1] == "--build":
            if self.produce and self.build_exit == 0:
                Path(f"{args[-1]}.deb").write_bytes(b"!<arch>\n")
            return subprocess.CompletedProcess(args, self.build_exit, None, None)
        return subprocess.CompletedProcess(args, self.info_exit, INFO_OUTPUT, "bad archive")


def _tree(tmp_path: Path, descriptor: PackageDescriptor) -> StagedTree:
    root = tmp_path / descriptor.tree_name
    root.mkdir()
    return StagedTree(root=root, descriptor=descriptor)


def test_build_success(tmp_path: Path, descriptor: PackageDescriptor) -> None:
    tree = _tree(tmp_path, descriptor)
    runner = FakeDpkgDeb()
    console = MockConsole()

    result = BackendDriver(workdir=tmp_path, console=console, runner=runner).build(tree)

    assert isinstance(result, Ok)
    artifact = result.value
    assert artifact.path == tmp_path / "opennic-up_dev-20251003-200505_amd64.deb"
    assert artifact.info == INFO_OUTPUT
    assert runner.calls == [
        ["dpkg-deb", "--build", "--root-owner-group", str(tree.root)],
        ["dpkg-deb", "--info", str(artifact.path)],
    ]
    assert console.find("Package: opennic-up")
    assert console.find("sudo dpkg -i opennic-up_dev-20251003-200505_amd64.deb")
    assert console.find("sudo dpkg -r opennic-up")


def test_backend_exit_zero_without_archive_is_not_trusted(
    tmp_path: Path, descriptor: PackageDescriptor
) -> None:
    tree = _tree(tmp_path, descriptor)
    runner = FakeDpkgDeb(produce=False)
    console = MockConsole()

    result = BackendDriver(workdir=tmp_path, console=console, runner=runner).build(tree)

    assert isinstance(result, Err)
    assert result.error.kind == "artifact_not_produced"
    assert len(runner.calls) == 1
    assert console.find("Package build failed!")


def test_backend_nonzero_exit(tmp_path: Path, descriptor: PackageDescriptor) -> None:
    tree = _tree(tmp_path, descriptor)

    result = BackendDriver(
        workdir=tmp_path, console=MockConsole(), runner=FakeDpkgDeb(build_exit=2)
    ).build(tree)

    assert isinstance(result, Err)
    assert result.error.kind == "backend_invocation_failure"
    assert "exit 2" in result.error.message


def test_info_failure_is_fatal(tmp_path: Path, descriptor: PackageDescriptor) -> None:
    tree = _tree(tmp_path, descriptor)
    console = MockConsole()

    result = BackendDriver(
        workdir=tmp_path, console=console, runner=FakeDpkgDeb(info_exit=1)
    ).build(tree)

    assert isinstance(result, Err)
    assert result.error.kind == "backend_invocation_failure"
    assert console.find("bad archive")


def test_backend_not_launchable(tmp_path: Path, descriptor: PackageDescriptor) -> None:
    class Missing:
        def run(
            self, args: list[str], *, capture: bool = True, cwd: Path | None = None
        ) -> subprocess.CompletedProcess[str]:
            raise FileNotFoundError(2, "No such file or directory", args[0])

    result = BackendDriver(workdir=tmp_path, console=MockConsole(), runner=Missing()).build(
        _tree(tmp_path, descriptor)
    )

    assert isinstance(result, Err)
    assert result.error.kind == "backend_invocation_failure"


def test_artifact_path_sits_next_to_tree(tmp_path: Path, descriptor: PackageDescriptor) -> None:
    tree = StagedTree(root=tmp_path / descriptor.tree_name, descriptor=descriptor)
    assert DPKG_DEB.artifact_path(tree) == tmp_path / f"{descriptor.tree_name}.deb"


def test_stale_archive_from_earlier_run_is_not_accepted(
    tmp_path: Path, descriptor: PackageDescriptor
) -> None:
    tree = _tree(tmp_path, descriptor)
    stale = tmp_path / f"{descriptor.tree_name}.deb"
    stale.write_bytes(b"old build")
    runner = FakeDpkgDeb(produce=False)

    result = BackendDriver(workdir=tmp_path, console=MockConsole(), runner=runner).build(tree)

    assert isinstance(result, Err)
    assert result.error.kind == "artifact_not_produced"
    assert not stale.exists()
    assert len(runner.calls) == 1


def test_stale_archive_that_cannot_be_removed(
    tmp_path: Path, descriptor: PackageDescriptor
) -> None:
    tree = _tree(tmp_path, descriptor)
    # A directory in place of the archive makes unlink fail.
    (tmp_path / f"{descriptor.tree_name}.deb").mkdir()
    runner = FakeDpkgDeb()

    result = BackendDriver(workdir=tmp_path, console=MockConsole(), runner=runner).build(tree)

    assert isinstance(result, Err)
    assert result.error.kind == "backend_invocation_failure"
    assert runner.calls == []
