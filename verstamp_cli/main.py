#!/usr/bin/env python3
"""
verstamp CLI

Rich-based command line for propagating a release version across source
constants, package manifests and build-tool properties.
"""

from __future__ import annotations

from typing import Optional

import typer

from .commands.inspect import list_targets, show_version_record
from .commands.set_version import run_set_version
from .utils.display import console

app = typer.Typer(
    name="verstamp",
    help="verstamp - write one release version into every project artifact",
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)


def version_callback(value: bool):
    if value:
        from _version import get_full_version
        console.print(f"verstamp v{get_full_version()}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information"
    ),
):
    """
    [bold blue]verstamp[/bold blue]

    Parses a release version, writes it into every configured artifact and
    checks the changes against a snapshot taken before writing.

    [dim]Examples:[/dim]
        verstamp set-version -v 0.75.0 -b dry-run
        verstamp set-version -v 0.75.0-rc.1 -b release -d '{"some-lib": "2.0.0"}'
        verstamp parse 0.0.0-20261018-0930 -b nightly
        verstamp targets
    """
    pass


@app.command("set-version")
def set_version(
    to_version: str = typer.Option(..., "--to-version", "-v", help="Version to set (e.g. 0.75.0)"),
    build_type: str = typer.Option(..., "--build-type", "-b", help="dry-run, nightly or release"),
    dependency_versions: Optional[str] = typer.Option(
        None, "--dependency-versions", "-d",
        help='JSON map of package versions, e.g. \'{"some-lib": "2.0.0"}\'',
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to verstamp config YAML"),
    root: Optional[str] = typer.Option(None, "--root", help="Workspace root (default: current directory)"),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging and full error diagnostics"),
):
    """🏷️  Write a version into every artifact and verify the result."""
    run_set_version(
        to_version=to_version,
        build_type=build_type,
        dependency_versions=dependency_versions,
        config=config,
        root=root,
        verbose=verbose,
    )


@app.command("parse")
def parse(
    version: str = typer.Argument(..., help="Version string to parse"),
    build_type: str = typer.Option("dry-run", "--build-type", "-b", help="dry-run, nightly or release"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to verstamp config YAML"),
    root: Optional[str] = typer.Option(None, "--root", help="Workspace root (default: current directory)"),
):
    """🔍 Parse a version and check it against a build type's policy."""
    show_version_record(version, build_type, config=config, root=root)


@app.command("targets")
def targets(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to verstamp config YAML"),
    root: Optional[str] = typer.Option(None, "--root", help="Workspace root (default: current directory)"),
):
    """📋 List configured artifact targets."""
    list_targets(config=config, root=root)


if __name__ == "__main__":
    app()
