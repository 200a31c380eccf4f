"""Configuration models and data locations for the career tracker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs

APP_NAME = "CareerTracker"

DEFAULT_SELF_WINDOW_MARKERS: tuple[str, ...] = ("AI Career Tracker", "career-tracker")


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for the session tracker and its queries."""

    poll_interval: timedelta = timedelta(seconds=2)
    min_session_seconds: int = 2
    self_window_markers: tuple[str, ...] = DEFAULT_SELF_WINDOW_MARKERS
    trend_days: int = 7
    history_limit: int = 50
    history_sample_size: int = 100

    @classmethod
    def from_intervals(
        cls,
        poll_seconds: float,
        min_session_seconds: int = 2,
        self_window_markers: Optional[tuple[str, ...]] = None,
    ) -> "TrackerSettings":
        return cls(
            poll_interval=timedelta(seconds=poll_seconds),
            min_session_seconds=min_session_seconds,
            self_window_markers=(
                tuple(self_window_markers)
                if self_window_markers
                else DEFAULT_SELF_WINDOW_MARKERS
            ),
        )


def data_dir() -> Path:
    """Return (and create) the per-user directory holding the database and logs."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False, roaming=True)
    path = Path(dirs.user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_db_path() -> Path:
    return data_dir() / "career-tracker.sqlite3"


def default_log_path() -> Path:
    return data_dir() / "tracker.log"
