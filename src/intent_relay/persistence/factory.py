"""Selects a storage backend from its configuration tag."""

from __future__ import annotations

from intent_relay.domain import StorageKind

from .errors import UnknownStorageError
from .interfaces import KeyValueStorage
from .memory import MemoryStorage
from .sqlite import create_sqlite_storage


def create_storage(kind: StorageKind | str, *, database_url: str) -> KeyValueStorage:
    try:
        resolved = StorageKind(kind)
    except ValueError as exc:
        msg = f"Unknown storage backend {kind!r}; expected one of {[k.value for k in StorageKind]}"
        raise UnknownStorageError(msg) from exc

    if resolved is StorageKind.MEMORY:
        return MemoryStorage()
    return create_sqlite_storage(database_url, kind=resolved)


__all__ = ["create_storage"]
