"""
Host OS scripting.

Runs AppleScript through osascript without blocking the event loop. Used by
the AppleScript backend and by the project-info / MIDI-learn tools.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from cuebridge_core.encoding.applescript import quote
from cuebridge_core.errors import ChannelFailure, RemoteUnreachable

logger = logging.getLogger(__name__)

ScriptRunner = Callable[[str], Awaitable[str]]

OSASCRIPT = "osascript"
DEFAULT_SCRIPT_TIMEOUT = 10.0  # seconds

# osascript error numbers meaning the target application is not there
_UNREACHABLE_CODES = ("(-600)", "(-1728)", "(-1712)", "(-10810)")


async def run_osascript(source: str, timeout: float = DEFAULT_SCRIPT_TIMEOUT) -> str:
    """
    Run an AppleScript and return its stdout.

    Raises:
        RemoteUnreachable: Application not running or not responding
        ChannelFailure: osascript missing or the script failed
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            OSASCRIPT,
            "-e",
            source,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise ChannelFailure("osascript not available (AppleScript requires macOS)") from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError as e:
        proc.kill()
        await proc.wait()
        raise RemoteUnreachable(f"AppleScript timed out after {timeout:.0f}s") from e

    if proc.returncode != 0:
        error = stderr.decode("utf-8", errors="replace").strip()
        logger.error(f"osascript failed ({proc.returncode}): {error}")
        if any(code in error for code in _UNREACHABLE_CODES):
            raise RemoteUnreachable(f"Application not responding: {error}")
        raise ChannelFailure(f"AppleScript failed: {error}")

    return stdout.decode("utf-8", errors="replace").strip()


def is_running_script(app_name: str) -> str:
    return f"return application {quote(app_name)} is running"


def project_info_script(app_name: str) -> str:
    """Name and path of the front document, or a not-running marker."""
    app = quote(app_name)
    return (
        f"if application {app} is not running then return \"not running\"\n"
        f"tell application {app}\n"
        f"    if (count of documents) is 0 then return \"no project open\"\n"
        f"    set doc to front document\n"
        f"    return (name of doc) & linefeed & (POSIX path of (path of doc as text))\n"
        f"end tell"
    )


def midi_learn_script(app_name: str) -> str:
    """Bring the app forward and open Controller Assignments (Cmd-K)."""
    app = quote(app_name)
    return (
        f"tell application {app} to activate\n"
        f'tell application "System Events"\n'
        f"    tell process {app}\n"
        f'        keystroke "k" using {{command down}}\n'
        f"    end tell\n"
        f"end tell"
    )
