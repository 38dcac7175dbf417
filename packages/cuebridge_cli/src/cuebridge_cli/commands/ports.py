"""Ports command - MIDI port discovery"""

import click

from cuebridge_link.backends import list_ports


@click.command()
@click.pass_context
def ports(ctx):
    """List available MIDI input and output ports

    Example:
        cuebridge ports
        cuebridge --json ports
    """
    formatter = ctx.obj['formatter']

    try:
        result = list_ports()
    except Exception as e:
        formatter.error("Failed to list MIDI ports", str(e))
        raise click.Abort()

    formatter.ports(result)
