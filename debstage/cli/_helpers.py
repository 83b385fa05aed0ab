"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from debstage.core.errors import ErrorCode
from debstage.core.result import Err, Result
from debstage.output.console import Style

if TYPE_CHECKING:
    from debstage.cli.context import CLIContext


T = TypeVar("T")
E = TypeVar("E")


def exit_on_error(
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.FAILURE,
) -> None:
    """Exit with error if result is Err, otherwise return.

    The failing stage has already printed its diagnostic, so only the
    optional 'hint' attribute of the error is shown here.
    """
    if isinstance(result, Err):
        hint: str | None = getattr(result.error, "hint", None)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))
