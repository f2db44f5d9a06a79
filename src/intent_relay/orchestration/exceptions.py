"""Exceptions for request orchestration."""

from __future__ import annotations

from intent_relay.domain import LifecycleNotification


class RelayError(RuntimeError):
    """Base class for orchestration failures."""


class ConfigurationError(RelayError):
    """Raised when the middleware is wired with invalid configuration."""


class LifecycleError(RelayError):
    """Raised when a lifecycle transition fails validation."""


class InvalidTransitionError(LifecycleError):
    """Raised when an invalid lifecycle transition is requested."""


class RequestFailed(RelayError):
    """Raised from a request handle's promise; carries the fail notification."""

    def __init__(self, notification: LifecycleNotification) -> None:
        super().__init__(notification.error_message or "")
        self.notification = notification


__all__ = [
    "ConfigurationError",
    "InvalidTransitionError",
    "LifecycleError",
    "RelayError",
    "RequestFailed",
]
