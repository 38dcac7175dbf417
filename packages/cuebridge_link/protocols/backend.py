"""
Control backend protocol.

A backend owns one outbound channel and, optionally, one inbound feedback
channel to the DAW. The connection manager opens and releases the two
channels independently; the engine only ever calls send().

Implementations:
    - MidiBackend: MMC/CC over mido ports (with feedback)
    - OscBackend: OSC over UDP via python-osc (feedback when a port is set)
    - AppleScriptBackend: osascript (fire-and-forget)
    - MockBackend: test double
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cuebridge_core.profiles import EncodingProfile
    from cuebridge_core.wire import WireMessage

    from ..feedback import FeedbackListener


@runtime_checkable
class ControlBackend(Protocol):
    """Interchangeable transport to the remote application."""

    kind: str
    profile: EncodingProfile

    @property
    def has_feedback(self) -> bool:
        """Whether this backend has an inbound channel at all."""
        ...

    @property
    def is_output_open(self) -> bool:
        ...

    @property
    def is_input_open(self) -> bool:
        ...

    async def open_output(self) -> str:
        """
        Acquire the outbound channel.

        Returns:
            Human-readable name of the channel (port name, host:port)

        Raises:
            ChannelFailure: Channel could not be opened
            RemoteUnreachable: Target is not running / not reachable
        """
        ...

    async def open_input(self, listener: FeedbackListener) -> str | None:
        """
        Acquire the inbound channel and route messages to listener.

        Returns:
            Channel name, or None when the backend has no return channel
        """
        ...

    def close_output(self) -> None:
        ...

    def close_input(self) -> None:
        ...

    async def send(self, message: WireMessage) -> None:
        """
        Transmit one encoded message.

        Raises:
            ChannelFailure: Write failed
        """
        ...

    def describe(self, message: WireMessage) -> str:
        """Short "via ..." label for a sent message."""
        ...

    def info(self) -> dict[str, Any]:
        """Connection details for status reporting."""
        ...
