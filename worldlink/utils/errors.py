# worldlink/utils/errors.py
from __future__ import annotations

from typing import Optional, Union


class WorldLinkError(Exception):
    """Base class for every error raised by worldlink."""


class ConnectionFailedError(WorldLinkError, ConnectionError):
    """
    Transport could not be opened (handshake refused, DNS failure, timeout).
    Moves the controller to ERRORED; never retried here.
    """


class TransportError(WorldLinkError):
    """Mid-session I/O fault on an open transport."""


class NotConnectedError(WorldLinkError):
    """send() called while the transport is not open."""


class InvalidStateError(WorldLinkError):
    """Lifecycle operation called from a state that does not allow it."""


class DecodeError(WorldLinkError, ValueError):
    """
    Malformed envelope or entity record.

    Local and non-fatal: reported to the consumer, the connection stays open.
    """

    def __init__(self, message: str, raw: Optional[Union[str, bytes]] = None):
        super().__init__(message)
        self.raw = raw
