"""Lightweight application configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass

from intent_relay.domain import StorageKind
from intent_relay.transport import DEFAULT_TIMEOUT


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    identity: str = "http"
    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    storage: StorageKind = StorageKind.MEMORY
    database_url: str = "sqlite+aiosqlite:///intent_relay.db"
    state_key: str = "relay-state"

    @classmethod
    def from_env(cls) -> AppSettings:
        return cls(
            environment=os.getenv("RELAY_ENV", cls.environment),
            identity=os.getenv("RELAY_IDENTITY", cls.identity),
            base_url=os.getenv("RELAY_BASE_URL", cls.base_url),
            timeout=_env_float("RELAY_TIMEOUT", cls.timeout),
            follow_redirects=_env_bool("RELAY_FOLLOW_REDIRECTS", cls.follow_redirects),
            storage=StorageKind(os.getenv("RELAY_STORAGE", cls.storage.value).strip().lower()),
            database_url=os.getenv("RELAY_DATABASE_URL", cls.database_url),
            state_key=os.getenv("RELAY_STATE_KEY", cls.state_key),
        )


__all__ = ["AppSettings"]
