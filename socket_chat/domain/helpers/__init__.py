"""Pure helper functions for the domain layer."""

from .transformations import capitalize_first

__all__ = ["capitalize_first"]
