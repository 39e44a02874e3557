"""Custom exception hierarchy for pms.

Engine operations and commands raise these; the router is the single place
that catches them and reports them to the user.
"""

from __future__ import annotations


class PmsError(Exception):
    """Base exception for all pms errors."""


class OutOfRangeError(PmsError, IndexError):
    """Index outside ``[0, len)`` given to an index-based songlist operation."""


class NotFoundError(PmsError, LookupError):
    """Song could not be located in a songlist."""


class PreconditionError(PmsError):
    """Command cannot proceed (no cursor song, not connected, no sort fields)."""


class ParseError(PmsError, ValueError):
    """Unexpected token for the grammar of the running command."""


class DaemonError(PmsError):
    """The MPD daemon rejected a request or the connection failed."""
