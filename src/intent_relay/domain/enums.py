"""Enumerations used across the intent relay domain layer."""

from __future__ import annotations

from enum import StrEnum


class HttpMethod(StrEnum):
    """HTTP verbs an intent may request."""

    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def carries_body(self) -> bool:
        return self in _BODY_METHODS


_BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.DELETE, HttpMethod.PATCH})


class Phase(StrEnum):
    """Lifecycle phase a notification belongs to."""

    PREPARE = "prepare"
    SUCCESS = "success"
    FAIL = "fail"


class Outcome(StrEnum):
    """Classification of a settled request."""

    SUCCESS = "success"
    CANCELLED = "cancelled"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"


class RequestState(StrEnum):
    """State machine followed by every admitted intent."""

    IDLE = "idle"
    PREPARING = "preparing"
    PENDING = "pending"
    SETTLED_SUCCESS = "settled_success"
    SETTLED_FAIL = "settled_fail"

    @property
    def is_terminal(self) -> bool:
        return self in {RequestState.SETTLED_SUCCESS, RequestState.SETTLED_FAIL}


class StorageKind(StrEnum):
    """Key/value storage backends available for state rehydration."""

    MEMORY = "memory"
    LOCAL = "local"
    SESSION = "session"
