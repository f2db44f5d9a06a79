"""Key/value storage abstraction used for state rehydration."""

from __future__ import annotations

from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """Asynchronous key/value capability with interchangeable backends."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def close(self) -> None: ...


__all__ = ["KeyValueStorage"]
