"""SQLite snapshot cache for remote catalogs.

Remote pulls (Google Sheets) are stored as JSON snapshots keyed by
source name and source key, and reused until their TTL runs out.
Generated playlists are never stored here.
"""

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

from pydantic import TypeAdapter, ValidationError

from .logging import get_logger
from .models import Song

logger = get_logger(__name__)

_SONG_LIST = TypeAdapter(list[Song])


class CatalogCache:
    """SQLite-based cache for catalog snapshots."""

    DEFAULT_TTL_HOURS = 1

    def __init__(self, db_path: Path, ttl_hours: int | None = None):
        """Initialize the cache.

        Args:
            db_path: Path to the SQLite database file
            ttl_hours: Snapshot lifetime; 0 disables reuse
        """
        self.db_path = Path(db_path)
        self.ttl = timedelta(hours=self.DEFAULT_TTL_HOURS if ttl_hours is None else ttl_hours)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._create_tables()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _create_tables(self) -> None:
        with self._get_connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS catalog_snapshots (
                    source_name TEXT NOT NULL,
                    source_key TEXT NOT NULL,
                    songs_json TEXT NOT NULL,
                    cached_at TEXT NOT NULL,
                    PRIMARY KEY (source_name, source_key)
                );
            """)
            conn.commit()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _is_expired(self, cached_at: str) -> bool:
        return self._now() - datetime.fromisoformat(cached_at) >= self.ttl

    def get_snapshot(self, source_name: str, source_key: str) -> list[Song] | None:
        """Get a cached snapshot, or None if missing, expired or unreadable.

        Unreadable snapshots are dropped.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                """
                SELECT songs_json, cached_at FROM catalog_snapshots
                WHERE source_name = ? AND source_key = ?
                """,
                (source_name, source_key),
            ).fetchone()

        if not row:
            return None

        try:
            if self._is_expired(row["cached_at"]):
                return None
            return _SONG_LIST.validate_json(row["songs_json"])
        except ValidationError as e:
            logger.warning("cache_snapshot_invalid", source=source_name, errors=e.error_count())
        except ValueError as e:
            logger.warning("cache_snapshot_invalid", source=source_name, error=str(e))

        self.invalidate(source_name, source_key)
        return None

    def set_snapshot(self, source_name: str, source_key: str, songs: list[Song]) -> None:
        """Store a snapshot, replacing any previous one for the same key."""
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO catalog_snapshots
                    (source_name, source_key, songs_json, cached_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    source_name,
                    source_key,
                    json.dumps([s.model_dump() for s in songs]),
                    self._now().isoformat(),
                ),
            )
            conn.commit()

    def invalidate(self, source_name: str, source_key: str) -> None:
        """Drop one snapshot."""
        with self._get_connection() as conn:
            conn.execute(
                "DELETE FROM catalog_snapshots WHERE source_name = ? AND source_key = ?",
                (source_name, source_key),
            )
            conn.commit()

    def clear_expired(self) -> int:
        """Clear all expired snapshots. Returns count of deleted rows."""
        cutoff = (self._now() - self.ttl).isoformat()
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM catalog_snapshots WHERE cached_at <= ?", (cutoff,))
            conn.commit()
            return cursor.rowcount

    def clear_all(self) -> None:
        """Clear all cached data."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM catalog_snapshots")
            conn.commit()
