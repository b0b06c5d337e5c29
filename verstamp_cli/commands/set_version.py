"""
set-version command for the verstamp CLI

Propagates a version into every configured artifact and reports the
verification outcome.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from verstamp_orchestrator.exceptions import VerstampError
from verstamp_orchestrator.propagator import VersionPropagator
from verstamp_orchestrator.run_summary import PropagationResult

from ..utils.config_helpers import load_cli_config, parse_dependency_versions
from ..utils.display import (
    console,
    show_success_message,
    show_unexpected_error,
    show_verstamp_error,
    show_warning_message,
)


def run_set_version(
    to_version: str,
    build_type: str,
    dependency_versions: Optional[str] = None,
    config: Optional[str] = None,
    root: Optional[str] = None,
    verbose: bool = False,
) -> PropagationResult:
    """Run the propagation; raises typer.Exit(1) on any hard error."""
    try:
        overrides = parse_dependency_versions(dependency_versions)
        cfg = load_cli_config(config, root, verbose)
        propagator = VersionPropagator(cfg)
    except VerstampError as e:
        show_verstamp_error(e, verbose)
        raise typer.Exit(1)
    except FileNotFoundError as e:
        show_unexpected_error(e)
        raise typer.Exit(1)

    try:
        result = propagator.propagate(to_version, overrides, build_type)
    except VerstampError as e:
        show_verstamp_error(e, verbose)
        if e.context.snapshot_dir:
            console.print(f"📁 [dim]Snapshot of files before the run: {escape(e.context.snapshot_dir)}[/dim]")
        raise typer.Exit(1)
    except (OSError, UnicodeError) as e:
        show_unexpected_error(e)
        raise typer.Exit(1)
    finally:
        propagator.close()

    _print_result(result)
    return result


def _print_result(result: PropagationResult) -> None:
    console.print(
        f"🏷️  [bold blue]Version {escape(result.version.version)}[/bold blue] "
        f"[dim]({result.build_type.value})[/dim]"
    )

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Target")
    table.add_column("Path", style="dim")
    table.add_column("Status", justify="center")
    for write in result.writes:
        table.add_row(
            write.target,
            escape(str(write.path)),
            "✏️ updated" if write.changed else "unchanged",
        )
    console.print(table)

    report = result.verification
    console.print(f"📁 [dim]Snapshot directory: {escape(str(result.snapshot_dir))}[/dim]")
    if report.is_verified:
        show_success_message(
            f"Verified {report.matched}/{report.expected} files changed to {result.version.version}"
        )
    else:
        show_warning_message(
            f"Failed to update all the files: {', '.join(report.files)} must have versions in them "
            f"(matched {report.matched} of {report.expected}). "
            f"These files may already have had version {result.version.version} set."
        )
