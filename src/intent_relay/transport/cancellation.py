"""Cooperative cancellation for in-flight requests."""

from __future__ import annotations

import asyncio

from .exceptions import RequestCancelled


class CancelToken:
    """Observed by a transport to abandon a call early."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise RequestCancelled(self._reason)

    def _trigger(self, reason: str | None) -> None:
        self._reason = reason
        self._event.set()


class CancelSource:
    """Owns one token for the lifetime of a single call."""

    def __init__(self) -> None:
        self.token = CancelToken()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def cancel(self, message: str | None = None) -> None:
        """Cancel the pending call; a no-op once the call has settled."""

        if self._closed or self.token.cancelled:
            return
        self.token._trigger(message)

    def close(self) -> None:
        self._closed = True


__all__ = ["CancelSource", "CancelToken"]
