"""Errors raised by the reading pipeline.

Any of these aborts processing of a single message; the message is not
read aloud and other messages and guilds are unaffected.
"""

from __future__ import annotations

from typing import Any


class YomiageError(Exception):
    """Base class for reading pipeline errors."""

    pass


class TransportError(YomiageError):
    """Raised when Redis or a name lookup fails at the network/protocol level."""

    pass


class ProtocolInvariantViolation(YomiageError):
    """Raised when Redis answers a conditional command with an undocumented code."""

    def __init__(self, command: str, response: Any) -> None:
        self.command = command
        self.response = response
        super().__init__(f"Unknown {command} response from Redis: {response!r}")


class QueueError(YomiageError):
    """Raised when the speech queue rejects a text (full or closed)."""

    pass
