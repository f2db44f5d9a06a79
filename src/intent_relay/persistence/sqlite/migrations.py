"""Schema setup for SQLite-backed storage."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from .models import Base


async def apply_migrations(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(
            text("CREATE TABLE IF NOT EXISTS relay_schema_migrations (version INTEGER PRIMARY KEY)")
        )
        result = await conn.execute(text("SELECT MAX(version) FROM relay_schema_migrations"))
        if result.scalar() is None:
            await conn.execute(text("INSERT INTO relay_schema_migrations (version) VALUES (1)"))


__all__ = ["apply_migrations"]
