"""SQLite seen-set for tracking records that were already notified."""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from .errors import StoreAccessError
from .models import SeenEntry

logger = logging.getLogger(__name__)


def utc_now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def init_db(db_path: str) -> sqlite3.Connection:
    """
    Initialize the database and create tables if they don't exist.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A connection to the database.
    """
    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS seen_entries (
            identity TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            deadline TEXT NOT NULL,
            source TEXT NOT NULL,
            first_seen_at TEXT NOT NULL
        )
    """)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS meta (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """)
    conn.commit()
    return conn


class NoveltyStore:
    """
    Append-only record of every identity ever notified.

    Rows are inserted once and never updated or deleted. Any sqlite3
    failure surfaces as StoreAccessError.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @classmethod
    def open(cls, db_path: str) -> "NoveltyStore":
        """Open (creating if needed) the store at ``db_path``."""
        try:
            return cls(init_db(db_path))
        except sqlite3.Error as e:
            raise StoreAccessError(f"Could not open store at {db_path}: {e}") from e

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "NoveltyStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get(self, identity: str) -> Optional[SeenEntry]:
        """
        Look up a seen entry by identity.

        Args:
            identity: Record identity.

        Returns:
            The stored entry, or None if the identity was never seen.
        """
        try:
            row = self.conn.execute(
                "SELECT identity, title, deadline, source, first_seen_at "
                "FROM seen_entries WHERE identity = ?",
                (identity,),
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreAccessError(f"Lookup of {identity!r} failed: {e}") from e
        return SeenEntry(*row) if row else None

    def add(self, identity: str, title: str, deadline: str, source_name: str) -> bool:
        """
        Insert a seen entry unless the identity is already present.

        The primary key makes this an atomic insert-if-absent, so two
        writers racing on one identity cannot both succeed.

        Args:
            identity: Record identity.
            title: Record title as extracted.
            deadline: Record deadline as extracted (may be empty).
            source_name: Name of the source that produced the record.

        Returns:
            True if a new row was written, False if the identity existed.
        """
        try:
            cursor = self.conn.execute(
                "INSERT OR IGNORE INTO seen_entries "
                "(identity, title, deadline, source, first_seen_at) VALUES (?, ?, ?, ?, ?)",
                (identity, title, deadline or "", source_name, utc_now()),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise StoreAccessError(f"Insert of {identity!r} failed: {e}") from e
        return cursor.rowcount == 1

    def history(self, source_name: Optional[str] = None, limit: Optional[int] = None) -> List[SeenEntry]:
        """
        List seen entries, most recent first.

        Args:
            source_name: If provided, only entries from this source.
            limit: Maximum number of entries to return.
        """
        query = "SELECT identity, title, deadline, source, first_seen_at FROM seen_entries"
        params: list = []
        if source_name:
            query += " WHERE source = ?"
            params.append(source_name)
        query += " ORDER BY first_seen_at DESC, rowid DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        try:
            rows = self.conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreAccessError(f"History query failed: {e}") from e
        return [SeenEntry(*row) for row in rows]

    def count(self, source_name: Optional[str] = None) -> int:
        try:
            if source_name:
                row = self.conn.execute(
                    "SELECT COUNT(*) FROM seen_entries WHERE source = ?", (source_name,)
                ).fetchone()
            else:
                row = self.conn.execute("SELECT COUNT(*) FROM seen_entries").fetchone()
        except sqlite3.Error as e:
            raise StoreAccessError(f"Count query failed: {e}") from e
        return row[0]

    def get_meta(self, key: str) -> Optional[str]:
        """
        Get a metadata value from the database.

        Args:
            key: Metadata key.

        Returns:
            The metadata value, or None if not found.
        """
        try:
            row = self.conn.execute("SELECT value FROM meta WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StoreAccessError(f"Meta lookup of {key!r} failed: {e}") from e
        return row[0] if row else None

    def set_meta(self, key: str, value: str) -> None:
        """
        Set a metadata value in the database.

        Args:
            key: Metadata key.
            value: Metadata value.
        """
        try:
            self.conn.execute(
                "INSERT OR REPLACE INTO meta (key, value) VALUES (?, ?)",
                (key, value)
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise StoreAccessError(f"Meta update of {key!r} failed: {e}") from e
