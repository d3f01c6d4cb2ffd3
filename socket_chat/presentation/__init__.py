"""Presentation layer for the socket chat client.

Wires the dependency graph and exposes the console front end. Everything
here talks to the connection manager only through its public operations.
"""

from .container import DIContainer, create_container, validate_container

__all__ = [
    "DIContainer",
    "create_container",
    "validate_container",
]
