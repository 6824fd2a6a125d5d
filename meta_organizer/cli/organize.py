"""
CLI command for organizing files.

Reorganizes a directory in place by extension, date and size.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import get_settings
from ..core.errors import EnumerationError
from ..core.types import (
    MoveOutcome,
    OrganizationResult,
    OrganizerConfig,
    OutcomeKind,
    TimeAttribute,
)
from ..organization import FileOrganizer
from ..shared.file_utils import format_bytes, setup_logging
from ..version import __version__

console = Console()
err_console = Console(stderr=True)


@click.command()
@click.argument(
    "source_directory",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-t",
    "--time",
    "time_attribute",
    type=click.Choice([attr.value for attr in TimeAttribute], case_sensitive=False),
    default=None,
    help="Time attribute to organize by (default: creation)",
)
@click.option(
    "--small",
    type=click.IntRange(min=0),
    default=None,
    help="Threshold for 'small' files in MB (default: 1)",
)
@click.option(
    "--medium",
    type=click.IntRange(min=0),
    default=None,
    help="Threshold for 'medium' files in MB (default: 10)",
)
@click.option(
    "-d",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Preview changes without executing (RECOMMENDED FIRST)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Show every file and debug logging",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Only show warnings, errors and the summary",
)
@click.option(
    "--no-progress",
    is_flag=True,
    default=False,
    help="Do not display a progress bar",
)
@click.version_option(version=__version__, prog_name="meta-organize")
def organize(
    source_directory: Path,
    time_attribute: Optional[str],
    small: Optional[int],
    medium: Optional[int],
    dry_run: bool,
    verbose: bool,
    quiet: bool,
    no_progress: bool,
) -> None:
    """
    Organize files in SOURCE_DIRECTORY by extension, date and size.

    Files are moved, in place, to
    <extension>/<YYYY>/<MM>/<DD>/<small|medium|large>/<filename>.
    A file whose destination already holds identical content is left where
    it is; different content is never overwritten, the moved file gets a
    _1, _2, ... suffix instead.

    \b
    Examples:
        # DRY RUN (preview changes - always do this first!)
        meta-organize /path/to/source --dry-run

        # Organize by modification time with custom thresholds
        meta-organize /path/to/source --time modification --small 2 --medium 20

    \b
    Defaults can be set with environment variables:
        META_ORGANIZER_TIME_ATTRIBUTE, META_ORGANIZER_SMALL_MB,
        META_ORGANIZER_MEDIUM_MB
    """
    setup_logging(verbose=verbose, quiet=quiet, console=err_console)

    settings = get_settings()
    thresholds = settings.size_thresholds(small, medium)
    config = OrganizerConfig(
        source_directory=source_directory.absolute(),
        time_attribute=(
            TimeAttribute(time_attribute.lower())
            if time_attribute
            else settings.time_attribute
        ),
        thresholds=thresholds,
        dry_run=dry_run,
        verbose=verbose,
    )

    if thresholds.small_max >= thresholds.medium_max:
        err_console.print(
            "[yellow]⚠ Small threshold is not below medium threshold; "
            "no file will be classified as medium[/yellow]"
        )

    if verbose:
        _display_config(config)

    if dry_run and not quiet:
        console.print(
            "\n[yellow]⚠ DRY RUN MODE - No files will be modified[/yellow]\n"
        )

    organizer = FileOrganizer.from_config(config, console=console)

    try:
        result = organizer.organize(show_progress=not (no_progress or quiet))
    except EnumerationError as e:
        err_console.print(f"[red]✗ Error: {escape(str(e))}[/red]")
        sys.exit(1)

    for outcome in result.outcomes:
        _display_outcome(outcome, verbose=verbose)

    _display_result(result)


def _display_config(config: OrganizerConfig) -> None:
    """Display the run configuration."""
    console.print("\n[cyan]Organization Configuration:[/cyan]")
    console.print(f"  Source: {config.source_directory}")
    console.print(f"  Dry run: {'YES' if config.dry_run else 'NO'}")
    console.print(f"  Time attribute: {config.time_attribute.value}")
    console.print(
        f"  Size thresholds: small < {format_bytes(config.thresholds.small_max)}, "
        f"medium < {format_bytes(config.thresholds.medium_max)}"
    )


def _display_outcome(outcome: MoveOutcome, verbose: bool) -> None:
    """Display a single file outcome."""
    source = outcome.source_path
    target = outcome.target_path

    if outcome.kind == OutcomeKind.FAILED:
        console.print(
            f"[red]✗ Failed: {escape(str(source))} ({escape(outcome.reason)})[/red]"
        )
        return

    if outcome.relocated:
        if not (outcome.dry_run or verbose):
            return
        prefix = "[DRY RUN] Would " if outcome.dry_run else ""
        if outcome.kind == OutcomeKind.RENAMED:
            verb = "rename" if outcome.dry_run else "Renamed"
        else:
            verb = "move" if outcome.dry_run else "Moved"
        console.print(
            f"{prefix}{verb}: {source} → {target}", markup=False, highlight=False
        )
        return

    if verbose:
        console.print(
            f"[dim]Skipping: {escape(str(source))} ({outcome.reason})[/dim]"
        )


def _display_result(result: OrganizationResult) -> None:
    """Display organization result."""
    console.print("\n[green]✓ Organization complete![/green]\n")

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Total files", str(result.total_files))
    table.add_row("Moved", str(result.moved))
    table.add_row("Renamed", str(result.renamed))
    table.add_row(
        "Skipped (identical)", str(result.count(OutcomeKind.SKIPPED_IDENTICAL))
    )
    table.add_row(
        "Skipped (in place)", str(result.count(OutcomeKind.SKIPPED_SAME_PATH))
    )
    table.add_row("Failed", str(result.failed))

    console.print(table)

    if result.dry_run:
        console.print("\n[yellow]This was a DRY RUN - no files were modified[/yellow]")
        console.print("Run without --dry-run to execute the organization.")


def main() -> None:
    """Console script entry point."""
    organize()


if __name__ == "__main__":
    main()
