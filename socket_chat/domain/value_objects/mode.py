"""Mode value object."""

from enum import Enum


class Mode(Enum):
    """Client operating mode.

    SIMULATED transforms messages in-process through the protocol
    simulator; LIVE forwards them to a real WebSocket endpoint.
    """

    SIMULATED = "simulated"
    LIVE = "live"
