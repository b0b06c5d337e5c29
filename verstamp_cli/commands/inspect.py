"""
parse and targets commands for the verstamp CLI

Read-only helpers: show how a version string is parsed for a build type,
and list the artifact targets a config describes.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from verstamp_orchestrator.exceptions import VerstampError
from verstamp_orchestrator.version import VersionRecord, parse_version

from ..utils.config_helpers import load_cli_config
from ..utils.display import console, show_unexpected_error, show_verstamp_error


def show_version_record(
    version: str,
    build_type: str,
    config: Optional[str] = None,
    root: Optional[str] = None,
) -> VersionRecord:
    """Parse ``version`` with the configured policy and print its fields."""
    try:
        cfg = load_cli_config(config, root)
        record = parse_version(version, build_type, cfg.policy)
    except VerstampError as e:
        show_verstamp_error(e)
        raise typer.Exit(1)
    except FileNotFoundError as e:
        show_unexpected_error(e)
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("version", escape(record.version))
    table.add_row("major", str(record.major))
    table.add_row("minor", str(record.minor))
    table.add_row("patch", str(record.patch))
    table.add_row("prerelease", escape(record.prerelease) if record.prerelease is not None else "[dim]none[/dim]")
    console.print(table)
    return record


def list_targets(config: Optional[str] = None, root: Optional[str] = None) -> None:
    """Print the configured artifact targets."""
    try:
        cfg = load_cli_config(config, root)
    except VerstampError as e:
        show_verstamp_error(e)
        raise typer.Exit(1)
    except FileNotFoundError as e:
        show_unexpected_error(e)
        raise typer.Exit(1)

    console.print(f"📂 [bold blue]Workspace:[/bold blue] {escape(str(cfg.root))}")
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Name")
    table.add_column("Format")
    table.add_column("Path", style="dim")
    table.add_column("Template", style="dim")
    table.add_column("Verified", justify="center")
    for target in cfg.targets:
        exists = cfg.resolve(target.path).exists()
        table.add_row(
            target.name,
            target.format.value,
            escape(str(target.path)) + ("" if exists else " [red](missing)[/red]"),
            escape(str(target.template)) if target.template else "-",
            "✅" if target.verify else "",
        )
    console.print(table)
