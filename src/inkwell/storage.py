"""Key-value storage providers for Inkwell.

The persistent store only needs ``get(key)`` and ``set(key, value)`` over
text values. ``SqliteStorage`` keeps them in a single SQLite table; the
connection is created with ``check_same_thread=False`` for Textual worker
thread compatibility. ``MemoryStorage`` keeps them in a dict.
"""

import sqlite3
from pathlib import Path
from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """Durable text storage addressed by key."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


def get_connection(db_path: Path) -> sqlite3.Connection:
    """Open a SQLite connection, creating the database file if needed.

    Parameters
    ----------
    db_path : Path
        Path to the database file.

    Returns
    -------
    sqlite3.Connection
        A connection with ``row_factory`` set to ``sqlite3.Row``.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create the key-value table if it does not exist.

    Parameters
    ----------
    conn : sqlite3.Connection
        An open database connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """)
    conn.commit()


class SqliteStorage:
    """Key-value storage backed by a SQLite ``kv`` table.

    Errors raised by SQLite propagate to the caller; the persistent store
    decides how to recover from them.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.conn = get_connection(db_path)
        init_db(self.conn)

    def get(self, key: str) -> Optional[str]:
        cursor = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row:
            return row["value"]
        return None

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        self.conn.commit()

    def keys(self) -> list[str]:
        """Return all stored keys, sorted alphabetically."""
        cursor = self.conn.execute("SELECT key FROM kv ORDER BY key")
        return [row["key"] for row in cursor]

    def close(self) -> None:
        self.conn.close()


class MemoryStorage:
    """Key-value storage held in a plain dict."""

    def __init__(self, data: Optional[dict[str, str]] = None) -> None:
        self.data = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def keys(self) -> list[str]:
        return sorted(self.data)

    def close(self) -> None:
        pass
