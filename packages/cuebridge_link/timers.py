"""Event-loop backed Timer implementation."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable


class AsyncioTimer:
    """Timer on the running asyncio event loop."""

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)

    async def sleep(self, delay: float) -> None:
        await asyncio.sleep(delay)
