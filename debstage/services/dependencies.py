# SPDX-License-Identifier: MIT
"""Check for required host tools and offer to install the missing ones.

Installation only ever runs a fixed apt-get command line built from package
names in the lookup table; nothing is parsed from user input.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Callable, Iterable, Mapping
from typing import Protocol

from debstage.core.result import Err, Ok, Result
from debstage.output.console import ConsoleProtocol, Style
from debstage.platform.process import CommandRunner, DefaultCommandRunner, ProcessError
from debstage.services.errors import PackagingError

__all__ = [
    "TOOL_PACKAGES",
    "AptToolProbe",
    "DependencyResolver",
    "ToolProbe",
    "packages_for",
]

# Command -> Debian package providing it. Unlisted commands map to themselves.
TOOL_PACKAGES: dict[str, str] = {
    "dpkg-deb": "dpkg-dev",
}


def packages_for(tools: Iterable[str], table: Mapping[str, str] = TOOL_PACKAGES) -> list[str]:
    """Map commands to installable package names, keeping order, without duplicates."""
    out: list[str] = []
    for tool in tools:
        pkg = table.get(tool, tool)
        if pkg not in out:
            out.append(pkg)
    return out


class ToolProbe(Protocol):
    """Host capabilities the resolver needs; swapped for a fake in tests."""

    def check_tool(self, name: str) -> bool:
        """Return True if `name` resolves on PATH."""
        ...

    def request_install(self, packages: list[str]) -> Result[None, PackagingError]:
        """Install `packages` with the system package manager."""
        ...


class AptToolProbe:
    """ToolProbe backed by PATH lookup and `sudo apt-get`."""

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        runner: CommandRunner | None = None,
        which: Callable[[str], str | None] | None = None,
    ) -> None:
        self._console = console
        self._runner = runner or DefaultCommandRunner()
        self._which = which or shutil.which

    def check_tool(self, name: str) -> bool:
        return self._which(name) is not None

    def request_install(self, packages: list[str]) -> Result[None, PackagingError]:
        commands = [
            ["sudo", "apt-get", "update"],
            ["sudo", "apt-get", "install", "-y", *packages],
        ]
        for argv in commands:
            self._console.print(f"Running: {shlex.join(argv)}", Style.DIM)
            try:
                proc = self._runner.run(argv, capture=False)
            except OSError as e:
                self._console.error(f"Could not run {argv[1]}: {e}")
                return Err(
                    PackagingError(
                        kind="dependency_install_failed",
                        message=f"Could not run {shlex.join(argv)}: {e}",
                    )
                )
            if proc.returncode != 0:
                error = ProcessError.from_completed(proc)
                self._console.error(f"Package installation failed: {error}")
                return Err(
                    PackagingError(
                        kind="dependency_install_failed",
                        message=str(error),
                        hint=f"Install manually: sudo apt-get install {' '.join(packages)}",
                    )
                )
        return Ok(None)


class DependencyResolver:
    """Make sure every required command is available before packaging starts."""

    def __init__(
        self,
        *,
        probe: ToolProbe,
        console: ConsoleProtocol,
        confirm: Callable[[str], bool] | None = None,
        packages: Mapping[str, str] | None = None,
    ) -> None:
        self._probe = probe
        self._console = console
        self._confirm = confirm
        self._packages = {**TOOL_PACKAGES, **(packages or {})}

    def missing(self, required: Iterable[str]) -> list[str]:
        return [tool for tool in sorted(set(required)) if not self._probe.check_tool(tool)]

    def ensure(self, required: set[str]) -> Result[None, PackagingError]:
        """Check `required` commands and, with consent, install what is missing."""
        if not required:
            return Ok(None)

        missing = self.missing(required)
        if not missing:
            self._console.info("All required dependencies are present.")
            return Ok(None)

        packages = packages_for(missing, self._packages)

        self._console.warning("Missing dependencies detected!")
        self._console.print("The following commands are required but not found:")
        for tool in missing:
            self._console.print(f"  - {tool}")
        self._console.newline()
        self._console.print("The following packages need to be installed:")
        for pkg in packages:
            self._console.print(f"  - {pkg}")
        self._console.newline()

        if self._confirm is None:
            self._console.error("Cannot prompt for confirmation (no prompt available)")
            return Err(
                PackagingError(
                    kind="dependency_install_declined",
                    message="Cannot proceed without required dependencies",
                    hint=f"Install manually: sudo apt-get install {' '.join(packages)}",
                )
            )

        if not self._confirm("Do you want to install these packages automatically?"):
            self._console.error("Cannot proceed without required dependencies. Exiting.")
            return Err(
                PackagingError(
                    kind="dependency_install_declined",
                    message="Dependency installation declined",
                    hint=f"Install manually: sudo apt-get install {' '.join(packages)}",
                )
            )

        self._console.info("Installing missing packages...")
        installed = self._probe.request_install(packages)
        if isinstance(installed, Err):
            return installed

        still_missing = self.missing(missing)
        if still_missing:
            self._console.error(
                "Still not found after installation: " + ", ".join(still_missing)
            )
            return Err(
                PackagingError(
                    kind="missing_dependency",
                    message="Required commands are still missing: " + ", ".join(still_missing),
                )
            )

        self._console.info("Dependencies installed successfully!")
        return Ok(None)
