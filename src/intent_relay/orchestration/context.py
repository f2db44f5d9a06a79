"""Protocols shared by the middleware and the pipeline that hosts it."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

NextHandler = Callable[[Any], Any]


class DispatchContext(Protocol):
    """Read access to state plus re-entrant dispatch, handed to middleware hooks."""

    def get_state(self) -> Mapping[str, Any]: ...

    def dispatch(self, message: Any) -> Any: ...


Middleware = Callable[[DispatchContext], Callable[[NextHandler], NextHandler]]

__all__ = ["DispatchContext", "Middleware", "NextHandler"]
