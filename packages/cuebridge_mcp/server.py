"""
cuebridge MCP server

Registers one tool per dispatcher entry on a FastMCP instance. Every tool
returns the dispatcher's text; failures come back as "Error: ..." text
rather than protocol errors.

Run over stdio:
    python -m cuebridge_mcp
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from cuebridge_core import __version__
from cuebridge_link import ToolDispatcher, create_bridge_context

from .config import Settings
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "cuebridge"

INSTRUCTIONS = (
    "Control a DAW's transport and mixer (Logic Pro by default). "
    "Call connect first, then transport, mixer or track. "
    "Responses say whether the DAW echoed the change; use feedback_status "
    "to see commands still waiting for acknowledgment and setup_guide for "
    "one-time DAW configuration."
)


def create_dispatcher(settings: Settings | None = None) -> ToolDispatcher:
    """Build a dispatcher over a production BridgeContext."""
    settings = settings or Settings()
    context = create_bridge_context(
        backend=settings.backend,
        midi_output_port=settings.midi_output_port,
        midi_input_port=settings.midi_input_port,
        midi_port_match=settings.midi_port_match,
        mixer_map_file=settings.mixer_map_file,
        osc_host=settings.osc_host,
        osc_port=settings.osc_port,
        osc_feedback_port=settings.osc_feedback_port,
        app_name=settings.app_name,
        feedback_timeout_ms=settings.feedback_timeout_ms,
        transport_grace_ms=settings.transport_grace_ms,
        mixer_grace_ms=settings.mixer_grace_ms,
    )
    return ToolDispatcher(context)


def create_server(dispatcher: ToolDispatcher) -> FastMCP:
    """Create a FastMCP server whose tools delegate to dispatcher."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            dispatcher.shutdown()
            logger.info("cuebridge server stopped")

    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS, lifespan=lifespan)

    @mcp.tool()
    async def connect() -> str:
        """Connect to the DAW using the configured backend (MIDI, OSC or AppleScript)."""
        return await dispatcher.call_text("connect")

    @mcp.tool()
    async def disconnect() -> str:
        """Disconnect from the DAW and drop pending acknowledgments."""
        return await dispatcher.call_text("disconnect")

    @mcp.tool()
    async def status() -> str:
        """Check connection status."""
        return await dispatcher.call_text("status")

    @mcp.tool()
    async def transport(
        action: Annotated[str, Field(description=(
            "play, stop, record, rewind, forward, pause, record_exit, record_pause, "
            "deferred_play, eject, chase, reset, write, shuttle or goto"
        ))],
        position: Annotated[float | None, Field(description="Position in seconds (goto only)")] = None,
    ) -> str:
        """Control the transport with MIDI Machine Control commands."""
        arguments: dict[str, Any] = {"action": action}
        if position is not None:
            arguments["position"] = position
        return await dispatcher.call_text("transport", arguments)

    @mcp.tool()
    async def mixer(
        track: Annotated[int, Field(description="Track number (1-32)")],
        parameter: Annotated[str, Field(description="volume, pan, mute, solo, send1 or send2")],
        value: Annotated[bool | float, Field(description="0.0-1.0, or true/false for mute/solo")],
    ) -> str:
        """Set a mixer parameter on a track."""
        return await dispatcher.call_text(
            "mixer", {"track": track, "parameter": parameter, "value": value}
        )

    @mcp.tool()
    async def track(
        number: Annotated[int, Field(description="Track number (1-based)")],
    ) -> str:
        """Select a track."""
        return await dispatcher.call_text("track", {"number": number})

    @mcp.tool()
    async def feedback_status() -> str:
        """Show commands still waiting for acknowledgment and feedback counters."""
        return await dispatcher.call_text("feedback_status")

    @mcp.tool()
    async def setup_guide() -> str:
        """Show setup instructions for the active backend."""
        return await dispatcher.call_text("setup_guide")

    @mcp.tool()
    async def get_project_info() -> str:
        """Get the name and path of the open project."""
        return await dispatcher.call_text("get_project_info")

    @mcp.tool()
    async def setup_midi_learn() -> str:
        """Open Controller Assignments in the DAW to learn mixer CCs."""
        return await dispatcher.call_text("setup_midi_learn")

    return mcp


def main(settings: Settings | None = None) -> None:
    """Start the MCP server on stdio."""
    settings = settings or Settings()
    configure_logging(settings.log_level)

    dispatcher = create_dispatcher(settings)
    mcp = create_server(dispatcher)
    logger.info(f"cuebridge {__version__} starting (backend={settings.backend})")
    mcp.run()


if __name__ == "__main__":
    main()
