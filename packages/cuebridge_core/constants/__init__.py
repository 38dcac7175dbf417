"""Protocol constants for cuebridge."""

from .midi import (
    CC_BANK_SELECT,
    CC_PAN,
    CC_VOLUME,
    GLOBAL_CHANNEL,
    MAX_TRACKS,
    SWITCH_PARAMETERS,
    cc_correlation_key,
    track_channel,
)
from .mmc import (
    GOTO_VERB,
    MMC_ACK_PATTERN,
    MMC_COMMANDS,
    MMC_PREFIX,
    matches_ack_pattern,
    transport_verbs,
)

TRANSPORT_KEY = "transport"

__all__ = [
    "CC_BANK_SELECT",
    "CC_PAN",
    "CC_VOLUME",
    "GLOBAL_CHANNEL",
    "GOTO_VERB",
    "MAX_TRACKS",
    "MMC_ACK_PATTERN",
    "MMC_COMMANDS",
    "MMC_PREFIX",
    "SWITCH_PARAMETERS",
    "TRANSPORT_KEY",
    "cc_correlation_key",
    "matches_ack_pattern",
    "track_channel",
    "transport_verbs",
]
