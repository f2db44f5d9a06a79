"""Transport-level exceptions."""

from __future__ import annotations


class TransportError(RuntimeError):
    """Base class for failures raised by an HTTP transport."""


class RequestCancelled(TransportError):
    """Raised when the call's cancel token fires before settlement."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")
        self.message = message


class TransportTimeout(TransportError):
    """Raised when no response arrived within the timeout."""


__all__ = ["RequestCancelled", "TransportError", "TransportTimeout"]
