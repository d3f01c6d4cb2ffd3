"""Protocol implementations."""

from .protocol_simulator import ProtocolSimulator

__all__ = ["ProtocolSimulator"]
