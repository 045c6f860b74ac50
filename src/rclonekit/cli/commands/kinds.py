"""List the rclone exit statuses and their error identifiers."""

import click

from rclonekit.classify import KIND_DESCRIPTIONS, ErrorKind
from rclonekit.cli.json_output import emit_json
from rclonekit.cli.json_schemas import ErrorKindInfo
from rclonekit.cli.rendering import make_console, render_error_kinds


@click.command("kinds")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
def kinds_cmd(output_json: bool) -> None:
    """Show rclone exit statuses and the identifiers accepted by --warn."""
    if output_json:
        kinds = [
            ErrorKindInfo(
                status=kind.status,
                identifier=kind.identifier,
                description=KIND_DESCRIPTIONS[kind],
            ).model_dump(mode="json")
            for kind in ErrorKind
            if kind is not ErrorKind.NONE
        ]
        emit_json({"kinds": kinds})
        return
    render_error_kinds(make_console())
