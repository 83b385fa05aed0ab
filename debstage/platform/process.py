"""Subprocess execution behind a mockable protocol.

Services never call subprocess directly; they receive a CommandRunner so
tests can substitute a fake backend or package manager.

Usage:
    runner = DefaultCommandRunner()
    proc = runner.run(["dpkg-deb", "--info", "pkg.deb"], cwd=Path("."))
    if proc.returncode != 0:
        print(ProcessError.from_completed(proc))
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

__all__ = ["CommandRunner", "DefaultCommandRunner", "ProcessError"]


class CommandRunner(Protocol):
    """Protocol for running external commands."""

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Run a command and return the result.

        Args:
            args: Command and arguments
            capture: Whether to capture stdout/stderr
            cwd: Working directory (optional)

        Returns:
            CompletedProcess with returncode, stdout, stderr

        Raises:
            OSError: If the program cannot be launched.
        """
        ...


class DefaultCommandRunner:
    """Default command runner using subprocess.run."""

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            args,
            capture_output=capture,
            text=True,
            check=False,
            cwd=cwd,
        )


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stderr: Standard error, when captured.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""

    @classmethod
    def from_completed(cls, proc: subprocess.CompletedProcess[str]) -> ProcessError:
        args = proc.args if isinstance(proc.args, list) else [str(proc.args)]
        return cls(
            command=tuple(str(a) for a in args),
            returncode=proc.returncode,
            stderr=(proc.stderr or "").strip() if isinstance(proc.stderr, str) else "",
        )

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"
