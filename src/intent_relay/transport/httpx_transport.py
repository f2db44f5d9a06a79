"""httpx-backed HTTP transport."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from .exceptions import RequestCancelled, TransportTimeout
from .interfaces import HttpTransport, OutboundRequest, TransportResponse

DEFAULT_TIMEOUT = 20.0


def decode_body(response: httpx.Response) -> Any:
    """Decode a response payload as JSON, falling back to text."""

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _body_kwargs(body: Any) -> dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, (bytes, str)):
        return {"content": body}
    return {"json": body}


class HttpxTransport(HttpTransport):
    """Issues outbound requests through an ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._logger = logger or logging.getLogger(__name__)

    async def send(self, request: OutboundRequest) -> TransportResponse:
        request.cancel_token.raise_if_cancelled()
        timeout = request.timeout if request.timeout is not None else self._timeout

        async with self._client_scope() as client:
            call = asyncio.ensure_future(
                client.request(
                    request.method.value,
                    request.url,
                    params=dict(request.params) or None,
                    headers=dict(request.headers),
                    timeout=timeout,
                    follow_redirects=request.follow_redirects,
                    **_body_kwargs(request.body),
                )
            )
            watcher = asyncio.ensure_future(request.cancel_token.wait())
            try:
                await asyncio.wait({call, watcher}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                watcher.cancel()
                abandoned = not call.done()
                if abandoned:
                    call.cancel()
                    await asyncio.gather(call, return_exceptions=True)

        if abandoned:
            self._logger.debug("Abandoned %s %s after cancellation", request.method, request.url)
            raise RequestCancelled(request.cancel_token.reason)

        try:
            response = call.result()
        except httpx.TimeoutException as exc:
            msg = f"timeout of {round(timeout * 1000)}ms exceeded"
            raise TransportTimeout(msg) from exc

        self._logger.debug(
            "%s %s answered %s", request.method, request.url, response.status_code
        )
        response.raise_for_status()
        return TransportResponse(
            status_code=response.status_code,
            data=decode_body(response),
            headers=dict(response.headers),
        )

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client


__all__ = ["DEFAULT_TIMEOUT", "HttpxTransport", "decode_body"]
