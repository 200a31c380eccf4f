"""Append-only session store and the aggregate queries read from it."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, timedelta
from pathlib import Path
from typing import Callable

from .db import (
    database_connection,
    fetch_category_totals_for_day,
    fetch_daily_category_totals,
    fetch_recent_sessions,
    insert_session,
    sum_duration_for_categories,
)
from .models import (
    CAREER_CATEGORIES,
    Category,
    DailyCategoryTotal,
    HistoryEntry,
    SessionRecord,
)

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when a session record could not be persisted."""


class SessionStore:
    """Durable collection of finalized sessions.

    Aggregates are computed on every read. Read failures are logged and
    reported as empty results so callers never need to handle them.
    """

    def __init__(self, db_path: Path, today: Callable[[], date] = date.today) -> None:
        self.db_path = Path(db_path)
        self._today = today

    def insert(self, record: SessionRecord) -> None:
        try:
            with database_connection(self.db_path) as conn:
                insert_session(conn, record)
        except (sqlite3.Error, UnicodeError, ValueError) as exc:
            raise StoreError(f"Failed to persist session for {record.app_name!r}") from exc

    def query_today(self) -> dict[Category, int]:
        today = self._today().isoformat()
        try:
            with database_connection(self.db_path) as conn:
                rows = fetch_category_totals_for_day(conn, today)
        except sqlite3.Error:
            logger.exception("Failed to read today's totals.")
            return {}
        return {Category(row["category"]): int(row["total"]) for row in rows}

    def query_range(self, days: int = 7) -> list[DailyCategoryTotal]:
        cutoff = (self._today() - timedelta(days=days)).isoformat()
        try:
            with database_connection(self.db_path) as conn:
                rows = fetch_daily_category_totals(conn, cutoff)
        except sqlite3.Error:
            logger.exception("Failed to read daily totals since %s.", cutoff)
            return []
        return [
            DailyCategoryTotal(
                date=row["date"],
                category=Category(row["category"]),
                total=int(row["total"]),
            )
            for row in rows
        ]

    def query_recent_history(
        self, limit: int = 50, sample_size: int = 100
    ) -> list[HistoryEntry]:
        try:
            with database_connection(self.db_path) as conn:
                rows = fetch_recent_sessions(conn, sample_size)
        except sqlite3.Error:
            logger.exception("Failed to read recent history.")
            return []

        groups: dict[tuple[str, str], HistoryEntry] = {}
        for row in rows:
            key = (row["app_name"], row["date"])
            entry = groups.get(key)
            if entry is None:
                entry = HistoryEntry(
                    app_name=row["app_name"],
                    category=Category(row["category"]),
                    duration=0,
                    date=row["date"],
                )
                groups[key] = entry
            entry.duration += int(row["duration"])

        # sorted() is stable, so groups of the same day stay in recency order.
        ordered = sorted(groups.values(), key=lambda item: item.date, reverse=True)
        return ordered[:limit]

    def query_cumulative(self) -> int:
        try:
            with database_connection(self.db_path) as conn:
                return sum_duration_for_categories(
                    conn, (category.value for category in CAREER_CATEGORIES)
                )
        except sqlite3.Error:
            logger.exception("Failed to read cumulative career time.")
            return 0
