"""Output formatting utilities"""

import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormatter:
    """Handles output formatting for JSON and human-readable modes"""

    def __init__(
        self,
        json_mode: bool = False,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        """Initialize output formatter

        Args:
            json_mode: Enable JSON output mode
            console: Rich console for regular output
            err_console: Rich console for errors (default: stderr)
        """
        self.json_mode = json_mode
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def success(self, message: str, data: Any = None) -> None:
        """Output success message

        Args:
            message: Success message (may span several lines)
            data: Optional data to include
        """
        if self.json_mode:
            output = {
                "status": "success",
                "message": message,
                "data": data,
            }
            print(json.dumps(output, indent=2, default=str))
            return

        first, _, rest = message.partition("\n")
        self.console.print(f"[green]✓[/green] {escape(first)}", highlight=False)
        if rest:
            self.console.print(escape(rest), highlight=False)

    def error(self, message: str, details: str | None = None) -> None:
        """Output error message

        Args:
            message: Error message
            details: Optional error details
        """
        if self.json_mode:
            output = {
                "status": "error",
                "message": message,
                "details": details,
            }
            print(json.dumps(output, indent=2, default=str), file=sys.stderr)
            return

        self.err_console.print(f"[red]✗[/red] {escape(message)}", highlight=False)
        if details:
            self.err_console.print(f"  {escape(details)}", highlight=False)

    def ports(self, ports: dict[str, list[str]]) -> None:
        """Output MIDI port listing"""
        if self.json_mode:
            print(json.dumps({"status": "success", "data": ports}, indent=2))
            return

        table = Table(title="MIDI ports")
        table.add_column("Direction")
        table.add_column("Name")
        for direction in ("outputs", "inputs"):
            names = ports.get(direction) or []
            if not names:
                table.add_row(direction, "[dim]none[/dim]")
            for name in names:
                table.add_row(direction, escape(name))
        self.console.print(table)

    def info(self, message: str) -> None:
        """Output info message (human mode only)"""
        if not self.json_mode:
            self.err_console.print(f"[blue]ℹ[/blue] {escape(message)}", highlight=False)
