from __future__ import annotations

from datetime import datetime

import typer

from debstage import __version__
from debstage.cli._helpers import exit_on_error
from debstage.cli.context import build_context
from debstage.core.package import default_manifest
from debstage.services.backend import BackendDriver
from debstage.services.dependencies import AptToolProbe, DependencyResolver
from debstage.services.pipeline import PackagingPipeline
from debstage.services.sources import SourceValidator
from debstage.services.staging import PackageTreeBuilder


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
)


@app.command()
def build(
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Stage the package tree and build the .deb in the current directory."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    ctx = build_context()
    descriptor = ctx.config.descriptor(datetime.now())

    pipeline = PackagingPipeline(
        descriptor=descriptor,
        manifest=default_manifest(descriptor.name),
        resolver=DependencyResolver(
            probe=AptToolProbe(console=ctx.console),
            console=ctx.console,
            confirm=lambda msg: typer.confirm(msg, default=False),
            packages=ctx.config.dependencies.packages,
        ),
        validator=SourceValidator(workdir=ctx.workdir, console=ctx.console),
        builder=PackageTreeBuilder(workdir=ctx.workdir, console=ctx.console),
        driver=BackendDriver(workdir=ctx.workdir, console=ctx.console),
        console=ctx.console,
    )

    exit_on_error(pipeline.run(), ctx)


def main() -> None:
    app()
