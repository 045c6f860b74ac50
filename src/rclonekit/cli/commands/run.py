"""Commands that invoke rclone: run, copy, md5sum and lsjson."""

import logging
from collections.abc import Callable

import click

from rclonekit.cli.json_output import emit_json, emit_json_error
from rclonekit.cli.json_schemas import RunCommandResponse
from rclonekit.cli.rendering import make_console, render_result
from rclonekit.context import RcloneContext
from rclonekit.errors import RcloneError, RcloneKitError
from rclonekit.output import user_output
from rclonekit.types import RcloneResult

logger = logging.getLogger(__name__)

# Let rclone flags such as -v or --dry-run pass through as arguments
PASSTHROUGH_SETTINGS = dict(ignore_unknown_options=True)

json_option = click.option("--json", "output_json", is_flag=True, help="Output JSON format")
warn_option = click.option(
    "--warn",
    "warn",
    multiple=True,
    metavar="ID",
    help="Error identifier to downgrade to a warning (e.g. rclone:dirNF). Repeatable.",
)


def _exit_code_for(error: RcloneKitError) -> int:
    if isinstance(error, RcloneError) and 0 < error.status <= 255:
        return error.status
    return 1


def execute(
    invoke: Callable[[], RcloneResult],
    *,
    output_json: bool,
) -> None:
    """Run an rclone call and render its result or error.

    rclone failures exit with rclone's own status so scripts can tell them
    apart; other failures exit with 1.
    """
    try:
        result = invoke()
    except RcloneKitError as e:
        exit_code = _exit_code_for(e)
        identifier = e.identifier if isinstance(e, RcloneError) else None
        logger.debug("rclone call failed: %s", type(e).__name__)
        if output_json:
            emit_json_error(str(e), type(e).__name__, exit_code=exit_code, identifier=identifier)
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(exit_code) from None
    except FileNotFoundError as e:
        if output_json:
            emit_json_error(str(e), type(e).__name__)
        user_output(click.style("Error: ", fg="red") + f"Executable not found: {e.filename}")
        raise SystemExit(1) from None

    if output_json:
        emit_json(RunCommandResponse.from_result(result).model_dump(mode="json"))
        return
    render_result(result, make_console())


@click.command("run", context_settings=PASSTHROUGH_SETTINGS)
@click.argument("template")
@click.argument("values", nargs=-1, type=click.UNPROCESSED)
@warn_option
@json_option
@click.pass_obj
def run_cmd(
    ctx: RcloneContext,
    template: str,
    values: tuple[str, ...],
    warn: tuple[str, ...],
    output_json: bool,
) -> None:
    """Run `rclone TEMPLATE` with %s placeholders filled from VALUES.

    \b
    Examples:
      rclonekit run "copy %s %s" ./photos remote:photos
      rclonekit run "lsjson %s" remote:missing --warn rclone:dirNF
    """
    execute(lambda: ctx.rclone.run(template, *values, warn=warn), output_json=output_json)


@click.command("copy", context_settings=PASSTHROUGH_SETTINGS)
@click.argument("source")
@click.argument("dest")
@click.argument("flags", nargs=-1, type=click.UNPROCESSED)
@warn_option
@json_option
@click.pass_obj
def copy_cmd(
    ctx: RcloneContext,
    source: str,
    dest: str,
    flags: tuple[str, ...],
    warn: tuple[str, ...],
    output_json: bool,
) -> None:
    """Copy SOURCE to DEST and list the files that were copied."""
    execute(lambda: ctx.rclone.copy(source, dest, *flags, warn=warn), output_json=output_json)


@click.command("md5sum", context_settings=PASSTHROUGH_SETTINGS)
@click.argument("path")
@click.argument("flags", nargs=-1, type=click.UNPROCESSED)
@warn_option
@json_option
@click.pass_obj
def md5sum_cmd(
    ctx: RcloneContext,
    path: str,
    flags: tuple[str, ...],
    warn: tuple[str, ...],
    output_json: bool,
) -> None:
    """Show MD5 hashes of the files under PATH (a directory ending in / or a file)."""
    execute(lambda: ctx.rclone.md5sum(path, *flags, warn=warn), output_json=output_json)


@click.command("lsjson", context_settings=PASSTHROUGH_SETTINGS)
@click.argument("path")
@click.argument("flags", nargs=-1, type=click.UNPROCESSED)
@warn_option
@json_option
@click.pass_obj
def lsjson_cmd(
    ctx: RcloneContext,
    path: str,
    flags: tuple[str, ...],
    warn: tuple[str, ...],
    output_json: bool,
) -> None:
    """List the directories and objects in PATH."""
    execute(lambda: ctx.rclone.lsjson(path, *flags, warn=warn), output_json=output_json)
