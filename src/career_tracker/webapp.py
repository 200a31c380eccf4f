"""FastAPI application that exposes the query surface and runs the tracker."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from .config import TrackerSettings, default_db_path
from .events import EventBus, EventLog
from .gate import DeepWorkGate
from .probe import FocusProbe, create_focus_probe
from .store import SessionStore
from .tracker import SessionTracker

logger = logging.getLogger(__name__)

ProbeFactory = Callable[[], Optional[FocusProbe]]


class TrackerRunner:
    """Manage the session tracker in a background thread."""

    def __init__(
        self,
        store: SessionStore,
        settings: TrackerSettings,
        gate: DeepWorkGate,
        probe_factory: ProbeFactory = create_focus_probe,
    ) -> None:
        self._store = store
        self._settings = settings
        self._gate = gate
        self._probe_factory = probe_factory
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self.tracker: Optional[SessionTracker] = None

    def start(self) -> None:
        with self._lock:
            if self._thread and self._thread.is_alive():
                return
            probe = self._probe_factory()
            if probe is None:
                logger.warning("Tracking disabled; the dashboard serves stored data only.")
                return
            tracker = SessionTracker(
                self._store, self._settings, probe=probe, gate=self._gate
            )
            stop_event = threading.Event()
            thread = threading.Thread(
                target=tracker.run_until_stopped,
                args=(stop_event,),
                name="session-tracker",
                daemon=True,
            )
            self.tracker = tracker
            self._thread = thread
            self._stop_event = stop_event
            thread.start()
            logger.info("Tracker background thread started.")

    def stop(self) -> None:
        thread: Optional[threading.Thread] = None
        with self._lock:
            if not self._thread or not self._thread.is_alive() or not self._stop_event:
                return
            self._stop_event.set()
            thread = self._thread
            self._thread = None
            self._stop_event = None
        if thread:
            # The thread flushes the open session after its loop exits.
            thread.join(timeout=10)
            logger.info("Tracker background thread stopped.")

    def is_running(self) -> bool:
        with self._lock:
            return bool(self._thread and self._thread.is_alive())


class DeepWorkPayload(BaseModel):
    enabled: bool

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    db_path: Optional[Path] = None,
    settings: Optional[TrackerSettings] = None,
    probe_factory: ProbeFactory = create_focus_probe,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or TrackerSettings()
    store = SessionStore(Path(db_path or default_db_path()))
    events = EventBus()
    event_log = EventLog()
    events.subscribe(event_log)
    gate = DeepWorkGate(events)
    runner = TrackerRunner(store, resolved_settings, gate, probe_factory)

    app = FastAPI(title="Career Tracker", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.gate = gate
    app.state.event_log = event_log
    app.state.tracker_runner = runner

    @app.on_event("startup")
    async def _startup() -> None:
        runner.start()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        runner.stop()

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        tracker = request.app.state.tracker_runner.tracker
        session = tracker.current_session() if tracker else None
        return {
            "tracker_running": request.app.state.tracker_runner.is_running(),
            "database_path": str(request.app.state.store.db_path),
            "poll_seconds": resolved_settings.poll_interval.total_seconds(),
            "deep_work": request.app.state.gate.enabled,
            "interruption": request.app.state.gate.interruption_title,
            "current_app": session[0] if session else None,
            "current_started_at": session[1].isoformat() if session else None,
        }

    @app.get("/api/stats")
    def stats(request: Request) -> Dict[str, Any]:
        totals = request.app.state.store.query_today()
        return {
            "totals": {category.value: seconds for category, seconds in totals.items()},
        }

    @app.get("/api/trend")
    def trend(
        request: Request,
        days: int = Query(
            default=resolved_settings.trend_days,
            ge=1,
            le=366,
            description="Number of days to look back from today.",
        ),
    ) -> Dict[str, Any]:
        rows = request.app.state.store.query_range(days)
        return {
            "days": days,
            "entries": [
                {"date": row.date, "category": row.category.value, "total": row.total}
                for row in rows
            ],
        }

    @app.get("/api/history")
    def history(
        request: Request,
        limit: int = Query(default=resolved_settings.history_limit, ge=1, le=500),
    ) -> Dict[str, Any]:
        entries = request.app.state.store.query_recent_history(
            limit=limit, sample_size=resolved_settings.history_sample_size
        )
        return {
            "entries": [
                {
                    "app_name": entry.app_name,
                    "category": entry.category.value,
                    "duration": entry.duration,
                    "date": entry.date,
                }
                for entry in entries
            ],
        }

    @app.get("/api/career-xp")
    def career_xp(request: Request) -> Dict[str, Any]:
        return {"seconds": request.app.state.store.query_cumulative()}

    @app.put("/api/deep-work")
    def set_deep_work(payload: DeepWorkPayload, request: Request) -> Dict[str, Any]:
        return {"enabled": request.app.state.gate.set_enabled(payload.enabled)}

    @app.post("/api/interruption/close")
    def close_interruption(request: Request) -> Dict[str, Any]:
        return {"closed": request.app.state.gate.dismiss()}

    @app.get("/api/live")
    def live(
        request: Request,
        after: int = Query(default=0, ge=0, description="Last sequence number seen."),
    ) -> Dict[str, Any]:
        entries = request.app.state.event_log.since(after)
        return {
            "events": entries,
            "last_seq": entries[-1]["seq"] if entries else after,
        }

    return app
