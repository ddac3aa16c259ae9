"""
Time-bounded caches for aggregated activity series.

Both caches share the same get/set/delete/clear interface so the web app can
switch between them from configuration.
"""

import hashlib
import json
import os
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any, Callable


def generate_cache_key(options: dict) -> str:
    """
    Build a stable cache key from query options.

    Empty values are ignored, so {"author": None} and {} share a key.
    """
    parts = {k: v for k, v in sorted(options.items()) if v not in (None, "")}
    digest = hashlib.sha256(json.dumps(parts, sort_keys=True).encode()).hexdigest()
    return f"activity:{digest[:32]}"


class MemoryCache:
    """In-process cache with per-entry expiry, safe to share between threads."""

    def __init__(
        self,
        default_ttl_seconds: float = 300,
        clock: Callable[[], float] = time.time,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() > expires_at:
                self._entries.pop(key, None)
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        return len(self._entries)


def _get_default_db_path() -> Path:
    """Get the default cache database path."""
    env_path = os.environ.get("GH_HEATMAP_CACHE_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".gh-heatmap" / "cache.db"


class SQLiteCache:
    """SQLite-backed cache of JSON-serializable values."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        default_ttl_seconds: float = 300,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            db_path: Path to the SQLite database file.
                     Defaults to ~/.gh-heatmap/cache.db
            default_ttl_seconds: Lifetime of entries set without a ttl
            clock: Time source returning epoch seconds
        """
        if db_path is None:
            db_path = _get_default_db_path()
        self.db_path = Path(db_path)
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._init_db()

    def _init_db(self) -> None:
        """Create the cache table if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS cache (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    expires_at REAL NOT NULL
                )
            """)
            conn.commit()

    def get(self, key: str) -> Any | None:
        """
        Get a cached value.

        Returns:
            The stored value, or None if missing or expired
        """
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT value, expires_at FROM cache WHERE key = ?",
                (key,),
            ).fetchone()

            if row is None:
                return None

            value, expires_at = row
            if self._clock() > expires_at:
                conn.execute("DELETE FROM cache WHERE key = ?", (key,))
                conn.commit()
                return None

        return json.loads(value)

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """
        Store a value (upserts).

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl_seconds: Lifetime of this entry; defaults to default_ttl_seconds
        """
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO cache (key, value, expires_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    expires_at = excluded.expires_at
                """,
                (key, json.dumps(value), self._clock() + ttl),
            )
            conn.commit()

    def delete(self, key: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM cache WHERE key = ?", (key,))
            conn.commit()

    def clear(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM cache")
            conn.commit()

    @property
    def size(self) -> int:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute("SELECT COUNT(*) FROM cache").fetchone()
        return row[0]
