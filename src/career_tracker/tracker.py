"""Session tracker: turns focus observations into persisted sessions."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from .classifier import KeywordClassifier
from .config import TrackerSettings
from .events import ACTIVE_WINDOW, SESSION_SAVED, EventBus
from .gate import DeepWorkGate
from .models import SessionRecord, TrackerState
from .probe import FocusProbe
from .store import SessionStore, StoreError

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    # Aware, so durations stay correct across DST changes.
    return datetime.now().astimezone()


def _saved_event(record: SessionRecord) -> tuple[str, Dict[str, Any]]:
    return (
        SESSION_SAVED,
        {"app": record.app_name, "duration": record.duration, "category": record.category.value},
    )


class SessionTracker:
    """Polls a focus probe at a fixed interval and records focus sessions.

    Each tick either extends the open session, or closes it and opens a new
    one when the focused title changed. Closed sessions shorter than
    ``settings.min_session_seconds`` are discarded.
    """

    def __init__(
        self,
        store: SessionStore,
        settings: Optional[TrackerSettings] = None,
        *,
        probe: Optional[FocusProbe] = None,
        classifier: Optional[KeywordClassifier] = None,
        gate: Optional[DeepWorkGate] = None,
        events: Optional[EventBus] = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.store = store
        self.settings = settings or TrackerSettings()
        self.events = events or (gate.events if gate else EventBus())
        self.gate = gate or DeepWorkGate(self.events)
        self._probe = probe
        self._classifier = classifier or KeywordClassifier()
        self._clock = clock
        self._state = TrackerState()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._probe is not None

    def current_session(self) -> Optional[tuple[str, datetime]]:
        with self._lock:
            if self._state.current_app is None or self._state.start_time is None:
                return None
            return self._state.current_app, self._state.start_time

    def run_forever(self) -> None:
        stop_event = threading.Event()
        try:
            self._run_loop(stop_event)
        except KeyboardInterrupt:
            logger.info("Tracker interrupted; closing the open session.")
        finally:
            self.flush()

    def run_until_stopped(self, stop_event: threading.Event) -> None:
        """Run the tracker until the provided event is set."""
        try:
            self._run_loop(stop_event)
        finally:
            self.flush()

    def tick(self) -> None:
        if self._probe is None:
            return
        try:
            observation = self._probe.poll()
            if observation is None:
                return
            title = observation.resolved_title()
            if self._is_own_window(title):
                return
            category = self._classifier.categorize(title)
        except Exception:
            logger.debug("Focus probe failed; skipping tick.", exc_info=True)
            return

        if self.gate.intercept(title, category):
            logger.debug("Blocked distraction: %s", title)
            return

        pending: list[tuple[str, Dict[str, Any]]] = []
        with self._lock:
            now = self._clock()
            state = self._state
            if (
                state.current_app is not None
                and state.current_app != title
                and state.start_time is not None
            ):
                record = self._close_session(state.current_app, state.start_time, now)
                if record is not None:
                    pending.append(_saved_event(record))
            if state.current_app != title:
                state.current_app = title
                state.start_time = now
                pending.append(
                    (ACTIVE_WINDOW, {"title": title, "category": category.value})
                )
        for name, payload in pending:
            self.events.publish(name, payload)

    def flush(self) -> Optional[SessionRecord]:
        """Close the open session, if any, ending it now."""
        with self._lock:
            state = self._state
            record = None
            if state.current_app is not None and state.start_time is not None:
                record = self._close_session(state.current_app, state.start_time, self._clock())
            state.reset()
        if record is not None:
            self.events.publish(*_saved_event(record))
        return record

    def _close_session(
        self, app_name: str, start_time: datetime, end_time: datetime
    ) -> Optional[SessionRecord]:
        duration = max(0, int((end_time - start_time).total_seconds()))
        if duration < self.settings.min_session_seconds:
            logger.debug("Discarding %ds session for %s", duration, app_name)
            return None

        record = SessionRecord(
            app_name=app_name,
            category=self._classifier.categorize(app_name),
            duration=duration,
            date=end_time.date().isoformat(),
            timestamp=int(end_time.timestamp() * 1000),
        )
        try:
            self.store.insert(record)
        except StoreError:
            logger.warning("Dropping session for %s", app_name, exc_info=True)
            return None
        return record

    def _is_own_window(self, title: str) -> bool:
        return any(marker in title for marker in self.settings.self_window_markers)

    def _run_loop(self, stop_event: threading.Event) -> None:
        if not self.enabled:
            logger.warning("No focus probe available; tracking is disabled.")
            return
        logger.info("Starting tracker; writing to %s", self.store.db_path)
        interval = self.settings.poll_interval.total_seconds()
        while not stop_event.is_set():
            self.tick()
            # Sleep in an interruptible manner.
            stop_event.wait(interval)
        logger.info("Tracker stopped.")
