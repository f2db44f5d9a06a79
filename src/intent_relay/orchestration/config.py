"""Configuration surface of the request middleware."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

import httpx

from intent_relay.domain import FailureTransform, Intent
from intent_relay.transport import DEFAULT_TIMEOUT

from .context import DispatchContext
from .exceptions import ConfigurationError

InitHook = Callable[[DispatchContext, Intent], None]
HeaderHook = Callable[[DispatchContext], Mapping[str, str]]
FailureHook = Callable[[httpx.HTTPStatusError], FailureTransform | None]
DisplayHook = Callable[[str], None]


def no_headers(context: DispatchContext) -> Mapping[str, str]:
    return {}


def status_failure_transform(error: httpx.HTTPStatusError) -> FailureTransform:
    """Default server-error hook: surface the status code only."""

    return FailureTransform(http_status=error.response.status_code)


def _ignore(message: str) -> None:
    return None


@dataclass(frozen=True, slots=True)
class TransportDefaults:
    """Options applied to every outbound call before per-intent overrides."""

    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    headers: Mapping[str, str] = field(default_factory=dict)
    follow_redirects: bool = True


@dataclass(frozen=True, slots=True)
class RequestMiddlewareConfig:
    """Immutable configuration shared by every call a middleware issues."""

    identity: str
    defaults: TransportDefaults = field(default_factory=TransportDefaults)
    on_init: InitHook | None = None
    derive_headers: HeaderHook = no_headers
    classify_failure: FailureHook = status_failure_transform
    on_show_success: DisplayHook = _ignore
    on_show_error: DisplayHook = _ignore

    def __post_init__(self) -> None:
        if not self.identity:
            msg = "Request middleware requires a non-empty identity"
            raise ConfigurationError(msg)
        if self.defaults.timeout <= 0:
            msg = f"Transport timeout must be positive, got {self.defaults.timeout}"
            raise ConfigurationError(msg)


__all__ = [
    "DisplayHook",
    "FailureHook",
    "HeaderHook",
    "InitHook",
    "RequestMiddlewareConfig",
    "TransportDefaults",
    "no_headers",
    "status_failure_transform",
]
