"""Human-readable rendering of rclone results.

Tables and diagnostics go to stderr. Raw rclone output for subcommands
without a parser goes to stdout so it can be piped like rclone's own output.
"""

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rclonekit.classify import KIND_DESCRIPTIONS, ErrorKind
from rclonekit.output import machine_output
from rclonekit.types import ChecksumListing, CopiedFiles, JsonListing, RcloneResult


def make_console() -> Console:
    return Console(stderr=True, soft_wrap=True)


def render_copied_files(files: CopiedFiles, console: Console) -> None:
    if not (files.new or files.updated or files.dry):
        console.print("No files copied.", style="dim")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("status", no_wrap=True)
    table.add_column("path")
    for path in files.new:
        table.add_row("[green]new[/green]", escape(path))
    for path in files.updated:
        table.add_row("[yellow]updated[/yellow]", escape(path))
    for path in files.dry:
        table.add_row("[dim]dry-run[/dim]", escape(path))
    console.print(table)


def render_checksums(listing: ChecksumListing, console: Console) -> None:
    if not listing.hashes:
        console.print("No files listed.", style="dim")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("md5", style="cyan", no_wrap=True)
    table.add_column("path")
    for path, file_hash in listing.hashes.items():
        table.add_row(file_hash, escape(path))
    console.print(table)


def render_listing(listing: JsonListing, console: Console) -> None:
    if listing.value is None:
        console.print("Directory not found.", style="dim")
        return

    # lsjson --stat and other variants do not produce a list of entries
    try:
        items = listing.items()
    except (TypeError, ValidationError):
        console.print_json(data=listing.value)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("name", no_wrap=True)
    table.add_column("size", justify="right")
    table.add_column("modified", no_wrap=True)
    for item in items:
        name = f"[blue]{escape(item.name)}/[/blue]" if item.is_dir else escape(item.name)
        size = "-" if item.is_dir else str(item.size)
        modified = item.mod_time.isoformat() if item.mod_time is not None else "-"
        table.add_row(name, size, modified)
    console.print(table)


def render_result(result: RcloneResult, console: Console) -> None:
    """Render a result for a human reader."""
    if result.error is not None:
        console.print(
            f"Warning: rclone exited with status {result.status} "
            f"({result.error.identifier}), continuing.",
            style="yellow",
        )

    parsed = result.parsed
    if isinstance(parsed, CopiedFiles):
        render_copied_files(parsed, console)
    elif isinstance(parsed, ChecksumListing):
        render_checksums(parsed, console)
    elif isinstance(parsed, JsonListing):
        render_listing(parsed, console)
    elif not result.command.verbose_requested:
        # Verbose calls already streamed their output while running
        machine_output(result.output, nl=False)


def render_error_kinds(console: Console) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("status", justify="right", no_wrap=True)
    table.add_column("identifier", style="cyan", no_wrap=True)
    table.add_column("description")
    for kind in ErrorKind:
        if kind is ErrorKind.NONE:
            continue
        status = "other" if kind.status is None else str(kind.status)
        table.add_row(status, kind.identifier, KIND_DESCRIPTIONS[kind])
    console.print(table)
