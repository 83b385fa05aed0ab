from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from debstage.core.config import CONFIG_FILENAME, Config, load_config_or_default
from debstage.core.errors import ErrorCode
from debstage.core.result import Err
from debstage.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    workdir: Path
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    workdir = Path.cwd()
    console = RichConsole()

    config_result = load_config_or_default(workdir / CONFIG_FILENAME)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(workdir=workdir, config=config_result.value, console=console)
