# src/cache/sqlite_store.py — v2
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3 — no external dependency.
Better performance than JSON for large numbers of documents.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from docdigest.cache.base_cache_store import BaseCacheStore
from docdigest.cache.models import CachedAnalysis

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS analyses (
    fingerprint TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    pipeline_version TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store for better performance at scale."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> CachedAnalysis | None:
        """Retrieve cache entry by key."""
        cursor = self._conn.execute(
            "SELECT data FROM analyses WHERE fingerprint = ?", (key,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return CachedAnalysis.model_validate_json(row[0])
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CachedAnalysis) -> None:
        """Store a cache entry (upsert)."""
        self._conn.execute(
            """INSERT OR REPLACE INTO analyses
               (fingerprint, data, pipeline_version)
               VALUES (?, ?, ?)""",
            (key, entry.model_dump_json(), entry.pipeline_version),
        )
        self._conn.commit()

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._conn.execute("DELETE FROM analyses WHERE fingerprint = ?", (key,))
        self._conn.commit()

    async def list_keys(self) -> list[str]:
        """List all cached keys."""
        cursor = self._conn.execute("SELECT fingerprint FROM analyses ORDER BY fingerprint")
        return [row[0] for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
