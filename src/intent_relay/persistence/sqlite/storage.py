"""SQLite key/value storage backing the ``local`` and ``session`` backends."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from intent_relay.domain import StorageKind
from intent_relay.persistence.errors import StorageClosedError
from intent_relay.persistence.interfaces import KeyValueStorage

from .migrations import apply_migrations
from .models import KeyValueRecord

LOCAL_NAMESPACE = "local"


def _now() -> datetime:
    return datetime.now(UTC)


class SQLiteStorage(KeyValueStorage):
    """Stores JSON values in one table, partitioned by namespace."""

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        namespace: str,
        purge_on_close: bool = False,
    ) -> None:
        self._engine = engine
        self._session_factory = session_factory
        self._namespace = namespace
        self._purge_on_close = purge_on_close
        self._migrated = False
        self._migration_lock = asyncio.Lock()
        self._closed = False

    @property
    def namespace(self) -> str:
        return self._namespace

    async def get(self, key: str) -> Any | None:
        await self._ready()
        async with self._session_factory() as session:
            record = await session.get(KeyValueRecord, (self._namespace, key))
            if record is None:
                return None
            return record.value

    async def set(self, key: str, value: Any) -> None:
        await self._ready()
        async with self._session_factory() as session, session.begin():
            record = await session.get(KeyValueRecord, (self._namespace, key))
            if record is None:
                session.add(
                    KeyValueRecord(
                        namespace=self._namespace,
                        key=key,
                        value=value,
                        updated_at=_now(),
                    )
                )
            else:
                record.value = value
                record.updated_at = _now()

    async def remove(self, key: str) -> None:
        await self._ready()
        async with self._session_factory() as session, session.begin():
            await session.execute(
                delete(KeyValueRecord).where(
                    KeyValueRecord.namespace == self._namespace,
                    KeyValueRecord.key == key,
                )
            )

    async def close(self) -> None:
        if self._closed:
            return
        if self._purge_on_close and self._migrated:
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    delete(KeyValueRecord).where(KeyValueRecord.namespace == self._namespace)
                )
        self._closed = True
        await self._engine.dispose()

    async def _ready(self) -> None:
        if self._closed:
            msg = f"Storage namespace {self._namespace} is closed"
            raise StorageClosedError(msg)
        if self._migrated:
            return
        async with self._migration_lock:
            if not self._migrated:
                await apply_migrations(self._engine)
                self._migrated = True


def create_sqlite_storage(database_url: str, *, kind: StorageKind) -> SQLiteStorage:
    """Build a persistent (``local``) or session-scoped (``session``) store."""

    engine = create_async_engine(database_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    if kind is StorageKind.SESSION:
        return SQLiteStorage(
            engine,
            session_factory,
            namespace=f"session:{uuid4().hex}",
            purge_on_close=True,
        )
    return SQLiteStorage(engine, session_factory, namespace=LOCAL_NAMESPACE)


__all__ = ["LOCAL_NAMESPACE", "SQLiteStorage", "create_sqlite_storage"]
