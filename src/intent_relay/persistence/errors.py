"""Custom persistence exceptions."""

from __future__ import annotations


class StorageError(RuntimeError):
    """Base class for key/value storage errors."""


class UnknownStorageError(StorageError):
    """Raised when a storage tag does not name a known backend."""


class StorageClosedError(StorageError):
    """Raised when a storage backend is used after ``close()``."""


__all__ = ["StorageClosedError", "StorageError", "UnknownStorageError"]
