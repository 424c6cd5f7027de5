from __future__ import annotations


class PollError(RuntimeError):
    """Base class for errors that end the polling loop."""


class TransportError(PollError):
    """Raised when the status endpoint cannot be reached or rejects a report."""


class ParseError(PollError):
    """Raised when the status endpoint answers with a body we cannot read."""


__all__ = ["PollError", "TransportError", "ParseError"]
