"""Serve command - run the MCP server on stdio"""

import click

from cuebridge_mcp.server import main as run_server


@click.command()
@click.pass_context
def serve(ctx):
    """Run the MCP server over stdio

    Example:
        cuebridge serve
        cuebridge --backend osc serve
    """
    run_server(ctx.obj['settings'])
