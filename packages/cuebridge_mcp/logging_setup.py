"""
Logging setup.

stdout carries the MCP stdio transport, so all diagnostics go to stderr.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger to write to stderr (replaces existing handlers)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # rtmidi backend chatter
    logging.getLogger("mido").setLevel(logging.WARNING)
