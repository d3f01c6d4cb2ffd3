"""Server implementations."""

from .capitalize_server import CapitalizeServer

__all__ = ["CapitalizeServer"]
