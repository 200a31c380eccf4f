"""Domain models for tracked sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Classification of a focused window."""

    LEARNING = "learning"
    PRODUCTIVE = "productive"
    DISTRACTION = "distraction"


# Categories that count towards career XP.
CAREER_CATEGORIES: tuple[Category, ...] = (Category.LEARNING, Category.PRODUCTIVE)


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """A finalized focus interval, as persisted in the store."""

    app_name: str
    category: Category
    duration: int
    date: str
    timestamp: int


@dataclass(slots=True)
class DailyCategoryTotal:
    date: str
    category: Category
    total: int


@dataclass(slots=True)
class HistoryEntry:
    """Durations for one app on one day, summed over recent sessions."""

    app_name: str
    category: Category
    duration: int
    date: str


@dataclass(slots=True)
class TrackerState:
    current_app: Optional[str] = None
    start_time: Optional[datetime] = None

    def reset(self) -> None:
        self.current_app = None
        self.start_time = None
