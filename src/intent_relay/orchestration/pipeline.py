"""Minimal message pipeline hosting request middlewares."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from intent_relay.domain import LifecycleNotification
from intent_relay.persistence import KeyValueStorage

from .context import DispatchContext, Middleware, NextHandler

Reducer = Callable[[Mapping[str, Any], Any], Mapping[str, Any]]


def record_notifications(state: Mapping[str, Any], message: Any) -> Mapping[str, Any]:
    """Keep the latest notification for every lifecycle tag."""

    if not isinstance(message, LifecycleNotification):
        return state
    updated = dict(state)
    updated[message.type] = message.model_dump(
        mode="json",
        include={"phase", "response", "outcome", "error_message", "http_status", "business_code"},
    )
    return updated


class MessagePipeline(DispatchContext):
    """Composes middlewares left to right around a recording terminal handler."""

    def __init__(
        self,
        middlewares: Sequence[Middleware] = (),
        *,
        reducer: Reducer | None = None,
        initial_state: Mapping[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._reducer = reducer
        self._state: dict[str, Any] = dict(initial_state or {})
        self._history: list[Any] = []
        self._logger = logger or logging.getLogger(__name__)

        chain: NextHandler = self._terminal
        for middleware in reversed(middlewares):
            chain = middleware(self)(chain)
        self._chain = chain

    @property
    def history(self) -> tuple[Any, ...]:
        return tuple(self._history)

    def get_state(self) -> Mapping[str, Any]:
        return dict(self._state)

    def dispatch(self, message: Any) -> Any:
        return self._chain(message)

    async def rehydrate(self, storage: KeyValueStorage, key: str) -> bool:
        stored = await storage.get(key)
        if not isinstance(stored, Mapping):
            return False
        self._state.update(stored)
        self._logger.debug("Rehydrated %d state entries from %s", len(stored), key)
        return True

    async def persist(self, storage: KeyValueStorage, key: str) -> None:
        await storage.set(key, dict(self._state))

    def _terminal(self, message: Any) -> Any:
        self._history.append(message)
        if self._reducer is not None:
            self._state = dict(self._reducer(self._state, message))
        return message


__all__ = ["MessagePipeline", "Reducer", "record_notifications"]
