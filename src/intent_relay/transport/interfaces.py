"""Protocols and value objects for the HTTP transport capability."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from intent_relay.domain import HttpMethod

from .cancellation import CancelToken


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    """Fully merged request handed to a transport."""

    method: HttpMethod
    url: str
    cancel_token: CancelToken
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    timeout: float | None = None
    follow_redirects: bool = False


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Decoded 2xx response."""

    status_code: int
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


class HttpTransport(Protocol):
    """Contract implemented by HTTP clients the middleware dispatches through.

    Implementations must observe ``request.cancel_token`` and raise
    ``RequestCancelled`` when it fires before the call settles. Non-2xx
    responses surface as ``httpx.HTTPStatusError``.
    """

    async def send(self, request: OutboundRequest) -> TransportResponse: ...


__all__ = ["HttpTransport", "OutboundRequest", "TransportResponse"]
