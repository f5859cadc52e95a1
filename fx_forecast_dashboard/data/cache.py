"""SQLite request cache for fetched series."""

import sqlite3
from datetime import datetime, timedelta
from pathlib import Path
from typing import Sequence

from fx_forecast_dashboard.models.market_data import TimeseriesPoint


class DataCache:
    """
    Transient SQLite cache keyed by request.

    Entries expire `ttl_seconds` after they were fetched; expired entries are
    never returned and are removed by `purge_expired`.
    """

    def __init__(self, db_path: Path, ttl_seconds: int = 300) -> None:
        self.db_path = db_path
        self.ttl = timedelta(seconds=ttl_seconds)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS requests (
                    cache_key TEXT PRIMARY KEY,
                    source TEXT NOT NULL,
                    fetched_at TEXT NOT NULL,
                    expires_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS observations (
                    cache_key TEXT NOT NULL,
                    date TEXT NOT NULL,
                    value REAL NOT NULL,
                    fetched_at TEXT NOT NULL,
                    PRIMARY KEY (cache_key, date)
                )
            """)

    @staticmethod
    def fx_key(base: str, quote: str, start: str, end: str) -> str:
        return f"{base}|{quote}|{start}|{end}"

    @staticmethod
    def gold_key(unit: str, start: str, end: str) -> str:
        return f"XAU|{unit}|{start}|{end}"

    def store_series(
        self,
        cache_key: str,
        points: Sequence[TimeseriesPoint],
        source: str,
        fetched_at: datetime | None = None,
    ) -> int:
        """
        Store a fetched series, replacing any previous entry for the key.

        Returns:
            Number of observations stored
        """
        fetched_at = fetched_at or datetime.now()
        expires_at = fetched_at + self.ttl
        rows = [(cache_key, p.date, float(p.value), fetched_at.isoformat()) for p in points]

        with self._get_connection() as conn:
            conn.execute("DELETE FROM observations WHERE cache_key = ?", (cache_key,))
            conn.execute(
                """
                INSERT OR REPLACE INTO requests (cache_key, source, fetched_at, expires_at)
                VALUES (?, ?, ?, ?)
                """,
                (cache_key, source, fetched_at.isoformat(), expires_at.isoformat()),
            )
            conn.executemany(
                """
                INSERT OR REPLACE INTO observations (cache_key, date, value, fetched_at)
                VALUES (?, ?, ?, ?)
                """,
                rows,
            )
        return len(rows)

    def get_series(
        self, cache_key: str, now: datetime | None = None
    ) -> list[TimeseriesPoint] | None:
        """
        Retrieve a cached series.

        Returns:
            Points ordered by date, or None if the key is missing or expired
        """
        now = now or datetime.now()
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT expires_at FROM requests WHERE cache_key = ?", (cache_key,)
            ).fetchone()
            if row is None or datetime.fromisoformat(row["expires_at"]) <= now:
                return None

            rows = conn.execute(
                "SELECT date, value FROM observations WHERE cache_key = ? ORDER BY date",
                (cache_key,),
            ).fetchall()

        return [TimeseriesPoint(date=r["date"], value=r["value"]) for r in rows]

    def invalidate(self, cache_key: str) -> bool:
        """Delete one entry regardless of age. Returns True if it existed."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM observations WHERE cache_key = ?", (cache_key,))
            deleted = conn.execute("DELETE FROM requests WHERE cache_key = ?", (cache_key,))
        return deleted.rowcount > 0

    def purge_expired(self, now: datetime | None = None) -> int:
        """Delete expired entries. Returns number of requests removed."""
        now_str = (now or datetime.now()).isoformat()
        with self._get_connection() as conn:
            expired = [
                row["cache_key"]
                for row in conn.execute(
                    "SELECT cache_key FROM requests WHERE expires_at <= ?", (now_str,)
                ).fetchall()
            ]
            conn.executemany(
                "DELETE FROM observations WHERE cache_key = ?", [(k,) for k in expired]
            )
            conn.executemany(
                "DELETE FROM requests WHERE cache_key = ?", [(k,) for k in expired]
            )
        return len(expired)

    def get_cache_status(self) -> dict[str, dict]:
        """Get status of cached data for each request."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT
                    r.cache_key,
                    r.source,
                    r.fetched_at,
                    r.expires_at,
                    COUNT(o.date) as observation_count,
                    MIN(o.date) as first_date,
                    MAX(o.date) as last_date
                FROM requests r
                LEFT JOIN observations o ON o.cache_key = r.cache_key
                GROUP BY r.cache_key
            """).fetchall()

        return {
            row["cache_key"]: {
                "source": row["source"],
                "observation_count": row["observation_count"],
                "first_date": row["first_date"],
                "last_date": row["last_date"],
                "fetched_at": row["fetched_at"],
                "expires_at": row["expires_at"],
            }
            for row in rows
        }
