"""SQLite database layer for session records."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

from .models import SessionRecord


def open_database(path: Path) -> sqlite3.Connection:
    """Open (and initialize) the SQLite database."""
    conn = sqlite3.connect(path, isolation_level=None, timeout=5.0)
    conn.row_factory = sqlite3.Row
    # The tracker is the only writer; WAL keeps dashboard reads from blocking it.
    conn.execute("PRAGMA journal_mode = WAL;")
    initialize_schema(conn)
    return conn


@contextmanager
def database_connection(path: Path) -> Iterator[sqlite3.Connection]:
    conn = open_database(path)
    try:
        yield conn
    finally:
        conn.close()


def initialize_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY,
            app_name TEXT NOT NULL,
            category TEXT NOT NULL
                CHECK (category IN ('learning', 'productive', 'distraction')),
            duration INTEGER NOT NULL CHECK (duration >= 0),
            date TEXT NOT NULL,
            timestamp INTEGER NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_sessions_date ON sessions(date);
        CREATE INDEX IF NOT EXISTS idx_sessions_timestamp ON sessions(timestamp);
        """
    )


def insert_session(conn: sqlite3.Connection, record: SessionRecord) -> None:
    conn.execute(
        """
        INSERT INTO sessions (app_name, category, duration, date, timestamp)
        VALUES (?, ?, ?, ?, ?)
        """,
        (
            record.app_name,
            record.category.value,
            record.duration,
            record.date,
            record.timestamp,
        ),
    )


def fetch_category_totals_for_day(conn: sqlite3.Connection, day: str) -> list[sqlite3.Row]:
    """Return total seconds per category recorded on ``day``."""
    return list(
        conn.execute(
            """
            SELECT category, SUM(duration) AS total
            FROM sessions
            WHERE date = ?
            GROUP BY category
            ORDER BY MIN(id);
            """,
            (day,),
        )
    )


def fetch_daily_category_totals(conn: sqlite3.Connection, cutoff: str) -> list[sqlite3.Row]:
    """Return per-day, per-category totals for every day on or after ``cutoff``."""
    return list(
        conn.execute(
            """
            SELECT date, category, SUM(duration) AS total
            FROM sessions
            WHERE date >= ?
            GROUP BY date, category
            ORDER BY date ASC, MIN(id) ASC;
            """,
            (cutoff,),
        )
    )


def fetch_recent_sessions(conn: sqlite3.Connection, limit: int) -> list[sqlite3.Row]:
    return list(
        conn.execute(
            """
            SELECT app_name, category, duration, date, timestamp
            FROM sessions
            ORDER BY timestamp DESC, id DESC
            LIMIT ?;
            """,
            (limit,),
        )
    )


def sum_duration_for_categories(conn: sqlite3.Connection, categories: Iterable[str]) -> int:
    values = list(categories)
    if not values:
        return 0
    placeholders = ", ".join("?" for _ in values)
    row = conn.execute(
        f"SELECT COALESCE(SUM(duration), 0) AS total FROM sessions WHERE category IN ({placeholders})",
        values,
    ).fetchone()
    return int(row["total"] or 0)
