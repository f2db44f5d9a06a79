"""SQLite storage implementation."""

from .storage import LOCAL_NAMESPACE, SQLiteStorage, create_sqlite_storage

__all__ = ["LOCAL_NAMESPACE", "SQLiteStorage", "create_sqlite_storage"]
