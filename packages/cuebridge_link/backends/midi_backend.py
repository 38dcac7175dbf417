"""
cuebridge MIDI backend

Sends MMC sysex and Control Change messages through a mido output port and
listens for the DAW's echo on a mido input port.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import mido
from mido import Message

from cuebridge_core.constants.mmc import MMC_LOCATE, MMC_PREFIX
from cuebridge_core.errors import ChannelFailure, NotConnected
from cuebridge_core.profiles import MidiProfile, MixerMap
from cuebridge_core.wire import MidiMessage, WireMessage

if TYPE_CHECKING:
    from ..feedback import FeedbackListener

logger = logging.getLogger(__name__)

DEFAULT_PORT_MATCH = "IAC"


def select_port(
    available: list[str],
    port_name: str | None = None,
    port_match: str | None = DEFAULT_PORT_MATCH,
) -> str | None:
    """
    Pick a MIDI port.

    Preference: exact configured name, then the first port containing
    port_match, then the first available port.

    Returns:
        Port name, or None if no port is usable
    """
    if not available:
        return None

    if port_name:
        return port_name if port_name in available else None

    if port_match:
        for name in available:
            if port_match in name:
                return name

    return available[0]


def list_ports() -> dict[str, list[str]]:
    """List available MIDI input and output ports"""
    return {
        "inputs": list(mido.get_input_names()),
        "outputs": list(mido.get_output_names()),
    }


class MidiBackend:
    """MIDI Machine Control / Control Change backend with echo feedback"""

    kind = "midi"

    def __init__(
        self,
        output_port: str | None = None,
        input_port: str | None = None,
        port_match: str | None = DEFAULT_PORT_MATCH,
        mixer_map: MixerMap | None = None,
        feedback: bool = True,
    ):
        """
        Initialize MIDI backend

        Args:
            output_port: Exact output port name (None: match / first available)
            input_port: Exact input port name (None: match / first available)
            port_match: Substring preferred when no exact name is given
            mixer_map: Mixer parameter -> controller table
            feedback: Open an input port for acknowledgments
        """
        self._output_name = output_port
        self._input_name = input_port
        self._port_match = port_match
        self._feedback = feedback
        self.profile = MidiProfile(mixer_map=mixer_map or MixerMap())

        self._out: mido.ports.BaseOutput | None = None
        self._in: mido.ports.BaseInput | None = None

    @property
    def has_feedback(self) -> bool:
        return self._feedback

    @property
    def is_output_open(self) -> bool:
        return self._out is not None

    @property
    def is_input_open(self) -> bool:
        return self._in is not None

    @property
    def output_name(self) -> str | None:
        return self._out.name if self._out is not None else None

    @property
    def input_name(self) -> str | None:
        return self._in.name if self._in is not None else None

    # ================================================================
    # Channel lifecycle
    # ================================================================

    async def open_output(self) -> str:
        try:
            available = list(mido.get_output_names())
        except Exception as e:
            raise ChannelFailure(f"MIDI system unavailable: {e}") from e
        logger.debug(f"Available MIDI output ports: {available}")

        name = select_port(available, self._output_name, self._port_match)
        if name is None:
            if self._output_name:
                raise ChannelFailure(f"MIDI output port '{self._output_name}' not found")
            raise ChannelFailure("No MIDI output ports available")

        try:
            self._out = mido.open_output(name)
        except Exception as e:
            raise ChannelFailure(f"MIDI output '{name}' could not be opened: {e}") from e

        logger.info(f"MIDI output connected to: {name}")
        return name

    async def open_input(self, listener: FeedbackListener) -> str | None:
        if not self._feedback:
            return None

        try:
            available = list(mido.get_input_names())
        except Exception as e:
            raise ChannelFailure(f"MIDI system unavailable: {e}") from e
        logger.debug(f"Available MIDI input ports: {available}")

        name = select_port(available, self._input_name, self._port_match)
        if name is None:
            if self._input_name:
                raise ChannelFailure(f"MIDI input port '{self._input_name}' not found")
            raise ChannelFailure("No MIDI input ports available")

        # mido invokes the callback on its own thread
        loop = asyncio.get_running_loop()

        def on_message(msg: Message) -> None:
            loop.call_soon_threadsafe(listener.on_midi, msg.bytes())

        try:
            self._in = mido.open_input(name, callback=on_message)
        except Exception as e:
            raise ChannelFailure(f"MIDI input '{name}' could not be opened: {e}") from e

        logger.info(f"MIDI input (feedback) connected to: {name}")
        return name

    def close_output(self) -> None:
        port, self._out = self._out, None
        if port is not None:
            port.close()
            logger.info("MIDI output disconnected")

    def close_input(self) -> None:
        port, self._in = self._in, None
        if port is not None:
            port.close()
            logger.info("MIDI input disconnected")

    # ================================================================
    # Sending
    # ================================================================

    async def send(self, message: WireMessage) -> None:
        if not isinstance(message, MidiMessage):
            raise TypeError(f"MidiBackend cannot send {type(message).__name__}")
        if self._out is None:
            raise NotConnected("Not connected to MIDI")

        try:
            self._out.send(Message.from_bytes(list(message.data)))
        except Exception as e:
            logger.error(f"MIDI send error: {e}")
            raise ChannelFailure(f"MIDI send failed: {e}") from e
        logger.debug(f"MIDI sent: {message}")

    def describe(self, message: WireMessage) -> str:
        if isinstance(message, MidiMessage):
            if message.is_control_change:
                return f"CC{message.data[1]} Ch{message.channel + 1}"
            if message.data[len(MMC_PREFIX):len(MMC_PREFIX) + 1] == (MMC_LOCATE,):
                return "MMC Locate"
        return "MMC"

    def info(self) -> dict[str, Any]:
        return {
            "backend": self.kind,
            "output": self.output_name,
            "input": self.input_name,
            "feedback": self._feedback,
        }
