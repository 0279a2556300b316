"""Exception hierarchy for tureng."""

from __future__ import annotations


class TurengError(Exception):
    """Base class for all tureng errors."""


class NetworkError(TurengError):
    """A dictionary lookup failed at the transport or HTTP level."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ResponseFormatError(TurengError):
    """The dictionary service returned a body that could not be parsed."""

    def __init__(self, message: str, url: str | None = None, body: str = "") -> None:
        super().__init__(message)
        self.url = url
        self.body = body


class TerminalError(TurengError, OSError):
    """The terminal could not be switched into or out of raw mode."""
