"""Show and edit rclonekit configuration."""

from dataclasses import replace

import click

from rclonekit.cli.json_output import emit_json
from rclonekit.cli.json_schemas import ConfigInfo
from rclonekit.config import CONFIG_KEYS, parse_config
from rclonekit.context import RcloneContext
from rclonekit.output import user_output


@click.group("config")
def config_group() -> None:
    """Manage rclonekit configuration."""


@config_group.command("show")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
def show_cmd(ctx: RcloneContext, output_json: bool) -> None:
    """Print the active configuration."""
    config = ctx.config
    if output_json:
        info = ConfigInfo(
            path=str(ctx.config_store.path()),
            exists=ctx.config_store.exists(),
            tool=config.tool,
            warn=list(config.warn),
        )
        emit_json(info.model_dump(mode="json"))
        return

    source = ctx.config_store.path() if ctx.config_store.exists() else "defaults"
    user_output(f"# {source}")
    user_output(f"tool={config.tool}")
    user_output(f"warn={','.join(config.warn)}")


@config_group.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
@click.pass_obj
def set_cmd(ctx: RcloneContext, key: str, value: str) -> None:
    """Set KEY to VALUE. For warn, VALUE is a comma-separated list."""
    store = ctx.config_store
    if key == "warn":
        data = {"warn": [entry.strip() for entry in value.split(",") if entry.strip()]}
    else:
        data = {"tool": value}

    try:
        parsed = parse_config(data, store.path())
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None

    if key == "warn":
        updated = replace(ctx.config, warn=parsed.warn)
    else:
        updated = replace(ctx.config, tool=parsed.tool)
    store.save(updated)
    user_output(click.style(f"✓ Set {key} in {store.path()}", fg="green"))
