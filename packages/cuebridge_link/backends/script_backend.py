"""
cuebridge AppleScript backend

Drives the DAW through osascript. There is no return channel: a command
counts as delivered once osascript exits successfully.
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING, Any

from cuebridge_core.errors import ChannelFailure, NotConnected, RemoteUnreachable
from cuebridge_core.profiles import ScriptProfile
from cuebridge_core.wire import ScriptMessage, WireMessage

from ..host import OSASCRIPT, ScriptRunner, is_running_script, run_osascript

if TYPE_CHECKING:
    from ..feedback import FeedbackListener

logger = logging.getLogger(__name__)


class AppleScriptBackend:
    """Fire-and-forget AppleScript backend"""

    kind = "applescript"

    def __init__(
        self,
        app_name: str = "Logic Pro",
        runner: ScriptRunner | None = None,
        check_host: bool = True,
    ):
        """
        Args:
            app_name: Target application name
            runner: Coroutine running a script (default: osascript)
            check_host: Verify osascript is on PATH before connecting
        """
        self.profile = ScriptProfile(app_name=app_name)
        self._runner: ScriptRunner = runner or run_osascript
        self._check_host = check_host
        self._open = False

    @property
    def has_feedback(self) -> bool:
        return False

    @property
    def is_output_open(self) -> bool:
        return self._open

    @property
    def is_input_open(self) -> bool:
        return False

    async def open_output(self) -> str:
        if self._check_host and shutil.which(OSASCRIPT) is None:
            raise ChannelFailure("osascript not available (AppleScript requires macOS)")

        running = await self._runner(is_running_script(self.profile.app_name))
        if running.strip().lower() != "true":
            raise RemoteUnreachable(f"{self.profile.app_name} is not running")

        self._open = True
        logger.info(f"AppleScript target: {self.profile.app_name}")
        return self.profile.app_name

    async def open_input(self, listener: FeedbackListener) -> str | None:
        return None

    def close_output(self) -> None:
        self._open = False

    def close_input(self) -> None:
        pass

    async def send(self, message: WireMessage) -> None:
        if not isinstance(message, ScriptMessage):
            raise TypeError(f"AppleScriptBackend cannot send {type(message).__name__}")
        if not self._open:
            raise NotConnected(f"Not connected to {self.profile.app_name}")
        await self._runner(message.source)
        logger.debug(f"AppleScript sent:\n{message.source}")

    def describe(self, message: WireMessage) -> str:
        return "AppleScript"

    def info(self) -> dict[str, Any]:
        return {
            "backend": self.kind,
            "app": self.profile.app_name,
        }
