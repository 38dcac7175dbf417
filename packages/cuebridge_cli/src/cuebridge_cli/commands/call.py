"""Call command - run one bridge tool from the shell"""

import asyncio
from typing import Any

import click
import yaml

from cuebridge_link import CommandResult, ToolDispatcher
from cuebridge_mcp.config import Settings
from cuebridge_mcp.logging_setup import configure_logging
from cuebridge_mcp.server import create_dispatcher

# Tools that need an open connection
CONNECTED_TOOLS = ("transport", "mixer", "track")


def parse_arguments(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Parse key=value pairs; values are read as YAML scalars (true, 0.5, 3)."""
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint='ARGS')
        try:
            arguments[key] = yaml.safe_load(raw) if raw else ""
        except yaml.YAMLError:
            arguments[key] = raw
    return arguments


@click.command()
@click.argument('tool')
@click.argument('args', nargs=-1)
@click.option('--connect/--no-connect', 'auto_connect', default=True,
              help='Connect before transport/mixer/track calls (default: on)')
@click.pass_context
def call(ctx, tool: str, args: tuple[str, ...], auto_connect: bool):
    """Run one tool against a fresh bridge

    Example:
        cuebridge call transport action=play
        cuebridge call transport action=goto position=90
        cuebridge call mixer track=1 parameter=volume value=0.8
        cuebridge --json call feedback_status
    """
    formatter = ctx.obj['formatter']
    settings: Settings = ctx.obj['settings']
    arguments = parse_arguments(args)

    if ctx.obj['verbose']:
        configure_logging(settings.log_level)
    if auto_connect and tool in CONNECTED_TOOLS:
        formatter.info(f"Connecting ({settings.backend})")

    try:
        result = asyncio.run(_call_async(settings, tool, arguments, auto_connect))
    except Exception as e:
        formatter.error(f"Failed to run {tool}", str(e))
        raise click.Abort()

    if result.success:
        formatter.success(result.text, result.data)
    else:
        formatter.error(result.text)
        raise click.Abort()


async def _call_async(
    settings: Settings,
    tool: str,
    arguments: dict[str, Any],
    auto_connect: bool,
) -> CommandResult:
    """Connect if needed, run the tool, then disconnect"""
    dispatcher: ToolDispatcher = create_dispatcher(settings)
    try:
        if auto_connect and tool in CONNECTED_TOOLS:
            connected = await dispatcher.run("connect")
            if not connected.success:
                return connected
        return await dispatcher.run(tool, arguments)
    finally:
        dispatcher.shutdown()
