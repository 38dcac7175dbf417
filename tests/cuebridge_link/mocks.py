"""
Test doubles for cuebridge_link.

Dataclass mocks that record every call, plus a manual clock that runs
scheduled callbacks only when the test advances time.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cuebridge_core.errors import ChannelFailure, NotConnected
from cuebridge_core.profiles import EncodingProfile, MidiProfile
from cuebridge_core.wire import WireMessage


@dataclass
class ManualHandle:
    """Handle returned by ManualTimer.call_later."""

    when: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualTimer:
    """
    Deterministic Timer: time moves only via advance() or sleep().

    sleep() advances the clock by the requested delay and fires every
    callback that came due, so a grace wait in the engine behaves as if
    that much time passed.
    """

    current: float = 0.0
    handles: list[ManualHandle] = field(default_factory=list)
    sleeps: list[float] = field(default_factory=list)
    on_sleep: Callable[[], None] | None = None

    def now(self) -> float:
        return self.current

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.current + delay, callback)
        self.handles.append(handle)
        return handle

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        if self.on_sleep is not None:
            self.on_sleep()
        self.advance(delay)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire due callbacks. Returns how many fired."""
        self.current += seconds
        fired = 0
        for handle in sorted(self.handles, key=lambda h: h.when):
            if handle.when <= self.current and not handle.cancelled and not handle.fired:
                handle.fired = True
                handle.callback()
                fired += 1
        return fired

    @property
    def active(self) -> list[ManualHandle]:
        """Handles neither cancelled nor fired."""
        return [h for h in self.handles if not h.cancelled and not h.fired]


@dataclass
class MockBackend:
    """ControlBackend double recording channel lifecycle and sent messages."""

    kind: str = "mock"
    profile: EncodingProfile = field(default_factory=MidiProfile)
    feedback: bool = True

    sent: list[WireMessage] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    listener: Any = None

    fail_output: Exception | None = None
    fail_input: Exception | None = None
    fail_send: Exception | None = None
    fail_close_output: Exception | None = None
    fail_close_input: Exception | None = None

    # yield to the loop inside open_* so concurrent connects interleave
    yield_on_open: bool = False
    # a second open_input while one is bound fails, like a busy UDP port
    exclusive_input: bool = False

    _output_open: bool = False
    _input_open: bool = False

    @property
    def has_feedback(self) -> bool:
        return self.feedback

    @property
    def is_output_open(self) -> bool:
        return self._output_open

    @property
    def is_input_open(self) -> bool:
        return self._input_open

    async def open_output(self) -> str:
        self.calls.append("open_output")
        if self.yield_on_open:
            await asyncio.sleep(0)
        if self.fail_output is not None:
            raise self.fail_output
        self._output_open = True
        return "Mock Out"

    async def open_input(self, listener: Any) -> str | None:
        self.calls.append("open_input")
        if self.yield_on_open:
            await asyncio.sleep(0)
        if self.exclusive_input and self._input_open:
            raise ChannelFailure("Feedback port unavailable: in use")
        if self.fail_input is not None:
            raise self.fail_input
        self.listener = listener
        self._input_open = True
        return "Mock In"

    def close_output(self) -> None:
        self.calls.append("close_output")
        self._output_open = False
        if self.fail_close_output is not None:
            raise self.fail_close_output

    def close_input(self) -> None:
        self.calls.append("close_input")
        self._input_open = False
        self.listener = None
        if self.fail_close_input is not None:
            raise self.fail_close_input

    async def send(self, message: WireMessage) -> None:
        if not self._output_open:
            raise NotConnected()
        if self.fail_send is not None:
            raise self.fail_send
        self.sent.append(message)

    def describe(self, message: WireMessage) -> str:
        return "Mock"

    def info(self) -> dict[str, Any]:
        return {"backend": self.kind}


@dataclass
class MockScriptRunner:
    """Records AppleScript sources and returns canned output."""

    output: str = ""
    error: Exception | None = None
    scripts: list[str] = field(default_factory=list)

    async def __call__(self, source: str) -> str:
        self.scripts.append(source)
        if self.error is not None:
            raise self.error
        return self.output
