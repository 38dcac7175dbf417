"""
cuebridge OSC backend

Sends OSC messages to the DAW's control-surface port (UDP) and, when a
feedback port is configured, receives its echo on an asyncio OSC server.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pythonosc import dispatcher, osc_server, udp_client

from cuebridge_core.errors import ChannelFailure, NotConnected, RemoteUnreachable
from cuebridge_core.profiles import OscProfile
from cuebridge_core.wire import OscMessage, WireMessage

if TYPE_CHECKING:
    from ..feedback import FeedbackListener

logger = logging.getLogger(__name__)


class OscBackend:
    """OSC control backend (works with any OSC control surface target)"""

    kind = "osc"

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 7000
    DEFAULT_FEEDBACK_PORT = 8000

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        feedback_port: int = DEFAULT_FEEDBACK_PORT,
        feedback_host: str = "0.0.0.0",
        profile: OscProfile | None = None,
    ):
        """
        Initialize OSC backend.

        Args:
            host: Host where the DAW listens for OSC
            port: DAW OSC port
            feedback_port: Local port for the DAW's replies (0 disables feedback)
            feedback_host: Interface to bind the feedback server on
            profile: Address templates
        """
        self._host = host
        self._port = port
        self._feedback_port = feedback_port
        self._feedback_host = feedback_host
        self.profile = profile or OscProfile()

        self._client: udp_client.SimpleUDPClient | None = None
        self._server_transport: asyncio.BaseTransport | None = None

    @property
    def has_feedback(self) -> bool:
        return self._feedback_port > 0

    @property
    def is_output_open(self) -> bool:
        return self._client is not None

    @property
    def is_input_open(self) -> bool:
        return self._server_transport is not None

    async def open_output(self) -> str:
        try:
            self._client = udp_client.SimpleUDPClient(self._host, self._port)
        except OSError as e:
            raise RemoteUnreachable(f"OSC target {self._host}:{self._port} not reachable: {e}") from e
        logger.info(f"OSC client connected to {self._host}:{self._port}")
        return f"{self._host}:{self._port}"

    async def open_input(self, listener: FeedbackListener) -> str | None:
        if not self.has_feedback:
            return None

        def on_message(address: str, *args: Any) -> None:
            listener.on_osc(address, args)

        disp = dispatcher.Dispatcher()
        disp.set_default_handler(on_message)

        server = osc_server.AsyncIOOSCUDPServer(
            (self._feedback_host, self._feedback_port), disp, asyncio.get_running_loop()
        )
        try:
            transport, _protocol = await server.create_serve_endpoint()
        except OSError as e:
            raise ChannelFailure(
                f"OSC feedback port {self._feedback_port} unavailable: {e}"
            ) from e

        self._server_transport = transport
        logger.info(f"OSC feedback server started on port {self._feedback_port}")
        return f"{self._feedback_host}:{self._feedback_port}"

    def close_output(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            client.close()
            logger.info("OSC client disconnected")

    def close_input(self) -> None:
        transport, self._server_transport = self._server_transport, None
        if transport is not None:
            transport.close()
            logger.info("OSC feedback server stopped")

    async def send(self, message: WireMessage) -> None:
        if not isinstance(message, OscMessage):
            raise TypeError(f"OscBackend cannot send {type(message).__name__}")
        if self._client is None:
            raise NotConnected("OSC client not connected")

        try:
            self._client.send_message(message.address, list(message.args))
        except OSError as e:
            logger.error(f"OSC send error: {e}")
            raise ChannelFailure(f"OSC send failed: {e}") from e
        logger.debug(f"OSC sent: {message}")

    def describe(self, message: WireMessage) -> str:
        if isinstance(message, OscMessage):
            return f"OSC {message.address}"
        return "OSC"

    def info(self) -> dict[str, Any]:
        return {
            "backend": self.kind,
            "host": self._host,
            "port": self._port,
            "feedback_port": self._feedback_port or None,
        }
