"""Text transformation helper functions.

This module provides the message transform applied by the capitalizing
server. The in-process simulator uses the very same function so simulated
and live modes are interchangeable.
"""

from ...const import EMPTY_MESSAGE_RESPONSE


def capitalize_first(message: str) -> str:
    """Upper-case the first character of a message.

    Only the first character changes: the rest of the message, including
    its case and any whitespace, is returned untouched. This differs from
    ``str.capitalize`` which lower-cases the remainder.

    Args:
        message: Message text as received

    Returns:
        Transformed message, or the fixed empty-message reply

    Examples:
        >>> capitalize_first("hello world")
        'Hello world'
        >>> capitalize_first("a")
        'A'
        >>> capitalize_first("hELLO")
        'HELLO'
        >>> capitalize_first("")
        'Empty message received'
    """
    if not message:
        return EMPTY_MESSAGE_RESPONSE

    if len(message) == 1:
        return message.upper()

    return message[0].upper() + message[1:]
