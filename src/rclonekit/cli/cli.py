import logging
import os

import click

from rclonekit.cli.commands.config import config_group
from rclonekit.cli.commands.kinds import kinds_cmd
from rclonekit.cli.commands.run import copy_cmd, lsjson_cmd, md5sum_cmd, run_cmd
from rclonekit.context import create_context
from rclonekit.output import user_output

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "RCLONEKIT_DEBUG"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="rclonekit")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Run rclone and get structured results back."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ValueError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None


cli.add_command(config_group)
cli.add_command(copy_cmd)
cli.add_command(kinds_cmd)
cli.add_command(lsjson_cmd)
cli.add_command(md5sum_cmd)
cli.add_command(run_cmd)


def main() -> None:
    """CLI entry point used by the `rclonekit` console script."""
    if os.environ.get(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    cli()
