# database.py
import sqlite3
from contextlib import closing
from typing import Dict, Optional
from config import DATABASE_FILE


class StorageError(Exception):
    """Raised when the underlying key-value store cannot be read or written."""


class SqliteStorage:
    """Durable string key -> string value store backed by a single sqlite table."""

    def __init__(self, path: str = DATABASE_FILE):
        self.path = path
        self.init_db()

    def get_conn(self):
        return sqlite3.connect(self.path, check_same_thread=False)

    def init_db(self) -> None:
        """Create the kv table if it doesn't exist."""
        try:
            with closing(self.get_conn()) as conn:
                c = conn.cursor()
                c.execute("""
                    CREATE TABLE IF NOT EXISTS kv (
                        key TEXT PRIMARY KEY,
                        value TEXT
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"cannot initialize {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        try:
            with closing(self.get_conn()) as conn:
                c = conn.cursor()
                c.execute("SELECT value FROM kv WHERE key = ?", (key,))
                row = c.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"cannot read {key}: {e}") from e
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        try:
            with closing(self.get_conn()) as conn:
                c = conn.cursor()
                # Upsert style
                c.execute("""
                    INSERT INTO kv (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value=excluded.value
                """, (key, value))
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"cannot write {key}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            with closing(self.get_conn()) as conn:
                c = conn.cursor()
                c.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"cannot remove {key}: {e}") from e


class MemoryStorage:
    """
    In-process store with the same interface as SqliteStorage.
    `quota` caps the total stored bytes (keys + values); exceeding it raises
    StorageError and leaves the store unchanged.
    """

    def __init__(self, quota: Optional[int] = None):
        self.quota = quota
        self._items: Dict[str, str] = {}

    def _size_with(self, key: str, value: str) -> int:
        items = dict(self._items)
        items[key] = value
        return sum(len(k.encode()) + len(v.encode()) for k, v in items.items())

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota is not None and self._size_with(key, value) > self.quota:
            raise StorageError(f"quota exceeded writing {key}")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
