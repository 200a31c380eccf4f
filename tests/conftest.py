"""Shared fixtures: fake focus probe, controllable clock and stores."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

import pytest

from career_tracker.models import SessionRecord
from career_tracker.probe import FocusObservation
from career_tracker.store import SessionStore, StoreError

TODAY = date(2026, 10, 19)

Step = Union[str, FocusObservation, Exception, None]


class FakeClock:
    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2026, 10, 19, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeProbe:
    """Replays scripted observations; titles, None, or exceptions to raise."""

    def __init__(
        self,
        steps: Iterable[Step] = (),
        on_exhausted: Optional[Callable[[], None]] = None,
    ) -> None:
        self.steps = list(steps)
        self.on_exhausted = on_exhausted
        self.polls = 0

    def poll(self) -> Optional[FocusObservation]:
        self.polls += 1
        if not self.steps:
            if self.on_exhausted:
                self.on_exhausted()
            return None
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        if isinstance(step, str):
            return FocusObservation(title=step)
        return step


class ListStore:
    """In-memory stand-in for SessionStore used by tracker tests."""

    def __init__(self, fail: bool = False) -> None:
        self.db_path = Path("memory")
        self.records: list[SessionRecord] = []
        self.fail = fail

    def insert(self, record: SessionRecord) -> None:
        if self.fail:
            raise StoreError("disk full")
        self.records.append(record)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def list_store() -> ListStore:
    return ListStore()


@pytest.fixture
def store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "sessions.sqlite3", today=lambda: TODAY)


@pytest.fixture
def recorded_events() -> list[tuple[str, dict]]:
    return []
