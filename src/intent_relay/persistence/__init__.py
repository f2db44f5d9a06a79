"""Key/value storage used to rehydrate pipeline state."""

from .errors import StorageClosedError, StorageError, UnknownStorageError
from .factory import create_storage
from .interfaces import KeyValueStorage
from .memory import MemoryStorage

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "StorageClosedError",
    "StorageError",
    "UnknownStorageError",
    "create_storage",
]
