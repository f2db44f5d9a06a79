"""Per-intent lifecycle state tracking."""

from __future__ import annotations

from intent_relay.domain import RequestState

from .exceptions import InvalidTransitionError

_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    RequestState.IDLE: frozenset({RequestState.PREPARING}),
    RequestState.PREPARING: frozenset({RequestState.PENDING}),
    RequestState.PENDING: frozenset({RequestState.SETTLED_SUCCESS, RequestState.SETTLED_FAIL}),
    RequestState.SETTLED_SUCCESS: frozenset(),
    RequestState.SETTLED_FAIL: frozenset(),
}


class RequestLifecycle:
    """Guards the idle -> preparing -> pending -> settled progression of one intent."""

    __slots__ = ("_state",)

    def __init__(self) -> None:
        self._state = RequestState.IDLE

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def settled(self) -> bool:
        return self._state.is_terminal

    def advance(self, next_state: RequestState) -> None:
        if next_state not in _TRANSITIONS[self._state]:
            msg = f"Cannot transition request from {self._state} to {next_state}"
            raise InvalidTransitionError(msg)
        self._state = next_state


__all__ = ["RequestLifecycle"]
