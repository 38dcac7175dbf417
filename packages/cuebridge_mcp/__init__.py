"""cuebridge MCP server: exposes the bridge tools over the Model Context Protocol."""

from .config import Settings
from .server import create_dispatcher, create_server, main

__all__ = ["Settings", "create_dispatcher", "create_server", "main"]
