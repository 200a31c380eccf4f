"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from collections import defaultdict

from .models import Category
from .store import SessionStore

_CATEGORY_ORDER = (Category.LEARNING, Category.PRODUCTIVE, Category.DISTRACTION)


class SummaryPrinter:
    """Render human-readable summaries of the session store in the console."""

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def print_today(self) -> None:
        totals = self.store.query_today()
        if not totals:
            print("No sessions recorded today.")
            return

        print("Today")
        print("-" * 40)
        for category in _CATEGORY_ORDER:
            if category in totals:
                print(f"  {category.value:<12} {format_duration(totals[category])}")
        print(f"  {'total':<12} {format_duration(sum(totals.values()))}")

    def print_trend(self, days: int = 7) -> None:
        rows = self.store.query_range(days)
        if not rows:
            print(f"No sessions recorded in the last {days} days.")
            return

        by_day: defaultdict[str, dict[Category, int]] = defaultdict(dict)
        for row in rows:
            by_day[row.date][row.category] = row.total

        header = "".join(f"{category.value:>14}" for category in _CATEGORY_ORDER)
        print(f"{'date':<12}{header}")
        print("-" * (12 + 14 * len(_CATEGORY_ORDER)))
        for day, totals in by_day.items():
            cells = "".join(
                f"{format_duration(totals.get(category, 0)):>14}"
                for category in _CATEGORY_ORDER
            )
            print(f"{day:<12}{cells}")

    def print_history(self, limit: int = 50, sample_size: int = 100) -> None:
        entries = self.store.query_recent_history(limit=limit, sample_size=sample_size)
        if not entries:
            print("No sessions recorded yet.")
            return

        for entry in entries:
            print(
                f"  {entry.date}  {entry.category.value:<12} "
                f"{entry.app_name[:45]:<45} {format_duration(entry.duration)}"
            )

    def print_career(self) -> None:
        seconds = self.store.query_cumulative()
        print(f"Career XP: {format_duration(seconds)} ({seconds // 3600} h)")


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
