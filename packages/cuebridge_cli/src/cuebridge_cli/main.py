"""Main CLI entry point"""

import click
from rich.console import Console

from cuebridge_cli.commands.call import call
from cuebridge_cli.commands.ports import ports
from cuebridge_cli.commands.serve import serve
from cuebridge_cli.utils.output import OutputFormatter
from cuebridge_mcp.config import Settings


@click.group()
@click.option('--backend', type=click.Choice(['midi', 'osc', 'applescript']), default=None,
              help='Control backend (default: CUEBRIDGE_BACKEND or midi)')
@click.option('--json', 'json_mode', is_flag=True, help='Output as JSON')
@click.option('--verbose', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, backend: str | None, json_mode: bool, verbose: bool):
    """cuebridge - drive a DAW's transport and mixer over MIDI, OSC or AppleScript

    Examples:
        cuebridge ports
        cuebridge call transport action=play
        cuebridge call mixer track=3 parameter=solo value=true
        cuebridge --backend osc serve
    """
    overrides = {}
    if backend:
        overrides['backend'] = backend
    if verbose:
        overrides['log_level'] = 'DEBUG'

    ctx.ensure_object(dict)
    ctx.obj['settings'] = Settings(**overrides)
    ctx.obj['verbose'] = verbose

    console = Console()
    ctx.obj['console'] = console
    ctx.obj['formatter'] = OutputFormatter(json_mode=json_mode, console=console)


# Register commands
cli.add_command(ports)
cli.add_command(call)
cli.add_command(serve)


if __name__ == '__main__':
    cli()
