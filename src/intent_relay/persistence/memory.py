"""Volatile in-process storage, mostly for tests."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from .interfaces import KeyValueStorage


@dataclass
class MemoryStorage(KeyValueStorage):
    """Volatile in-process storage; values are deep-copied on the way in and out."""

    _values: dict[str, Any] = field(default_factory=dict)

    async def get(self, key: str) -> Any | None:
        return deepcopy(self._values.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = deepcopy(value)

    async def remove(self, key: str) -> None:
        self._values.pop(key, None)

    async def close(self) -> None:
        return None


__all__ = ["MemoryStorage"]
