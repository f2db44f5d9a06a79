"""Builds outbound requests from intents and issues them through a transport."""

from __future__ import annotations

from dataclasses import dataclass

from intent_relay.domain import Intent
from intent_relay.transport import (
    CancelSource,
    HttpTransport,
    OutboundRequest,
    TransportResponse,
)

from .config import HeaderHook, TransportDefaults
from .context import DispatchContext


def resolve_url(base_url: str, uri: str) -> str:
    """Join ``uri`` onto ``base_url`` unless it is already absolute."""

    if not base_url or "://" in uri:
        return uri
    if not uri:
        return base_url
    return f"{base_url.rstrip('/')}/{uri.lstrip('/')}"


@dataclass(frozen=True, slots=True)
class PreparedCall:
    """An outbound request bound to the cancel source that controls it."""

    request: OutboundRequest
    source: CancelSource

    def cancel(self, message: str | None = None) -> None:
        self.source.cancel(message)


class RequestExecutor:
    """Layers defaults, overrides and headers, then sends through the transport."""

    def __init__(
        self,
        transport: HttpTransport,
        defaults: TransportDefaults,
        derive_headers: HeaderHook,
    ) -> None:
        self._transport = transport
        self._defaults = defaults
        self._derive_headers = derive_headers

    def prepare(self, intent: Intent, context: DispatchContext) -> PreparedCall:
        overrides = intent.request_options
        headers = {
            **self._defaults.headers,
            **self._derive_headers(context),
            **overrides.headers,
        }
        params = overrides.params if overrides.params is not None else intent.query
        follow_redirects = (
            overrides.follow_redirects
            if overrides.follow_redirects is not None
            else self._defaults.follow_redirects
        )
        source = CancelSource()
        request = OutboundRequest(
            method=intent.method,
            url=resolve_url(self._defaults.base_url, intent.uri),
            cancel_token=source.token,
            params=dict(params),
            headers=headers,
            body=intent.body if intent.method.carries_body else None,
            timeout=overrides.timeout or self._defaults.timeout,
            follow_redirects=follow_redirects,
        )
        return PreparedCall(request=request, source=source)

    async def execute(self, call: PreparedCall) -> TransportResponse:
        try:
            return await self._transport.send(call.request)
        finally:
            call.source.close()


__all__ = ["PreparedCall", "RequestExecutor", "resolve_url"]
