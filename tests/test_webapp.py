from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from career_tracker.config import TrackerSettings
from career_tracker.models import Category, SessionRecord
from career_tracker.store import SessionStore
from career_tracker.webapp import create_app


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "sessions.sqlite3"
    store = SessionStore(path)
    today = date.today()
    yesterday = (today - timedelta(days=1)).isoformat()
    for index, (app, category, duration, day) in enumerate(
        [
            ("Python docs", "learning", 10, today.isoformat()),
            ("Python docs", "learning", 5, today.isoformat()),
            ("YouTube", "distraction", 3, today.isoformat()),
            ("Editor", "productive", 40, yesterday),
        ]
    ):
        store.insert(
            SessionRecord(
                app_name=app,
                category=Category(category),
                duration=duration,
                date=day,
                timestamp=index,
            )
        )
    return path


@pytest.fixture
def client(db_path):
    app = create_app(db_path=db_path, probe_factory=lambda: None)
    return TestClient(app)


def test_stats_reports_today_only(client):
    response = client.get("/api/stats")

    assert response.status_code == 200
    assert response.json()["totals"] == {"learning": 15, "distraction": 3}


def test_trend_is_sorted_by_date(client):
    entries = client.get("/api/trend", params={"days": 7}).json()["entries"]

    assert [entry["date"] for entry in entries] == sorted(entry["date"] for entry in entries)
    assert {"category": "productive", "total": 40} in [
        {"category": e["category"], "total": e["total"]} for e in entries
    ]


def test_trend_rejects_non_positive_days(client):
    assert client.get("/api/trend", params={"days": 0}).status_code == 422


def test_history_and_career_xp(client):
    history = client.get("/api/history", params={"limit": 2}).json()["entries"]
    xp = client.get("/api/career-xp").json()

    assert len(history) == 2
    assert history[0] == {
        "app_name": "YouTube",
        "category": "distraction",
        "duration": 3,
        "date": date.today().isoformat(),
    }
    assert xp == {"seconds": 55}


def test_deep_work_toggle_and_live_events(client):
    assert client.put("/api/deep-work", json={"enabled": True}).json() == {"enabled": True}
    client.app.state.gate.intercept("Netflix", Category.DISTRACTION)

    live = client.get("/api/live").json()
    assert [event["event"] for event in live["events"]] == ["interruption-opened", "blocked"]

    assert client.post("/api/interruption/close").json() == {"closed": True}
    newer = client.get("/api/live", params={"after": live["last_seq"]}).json()
    assert [event["event"] for event in newer["events"]] == ["interruption-closed"]

    assert client.put("/api/deep-work", json={"enabled": False}).json() == {"enabled": False}
    assert client.get("/api/status").json()["deep_work"] is False


def test_deep_work_payload_is_validated(client):
    assert client.put("/api/deep-work", json={"enabled": True, "x": 1}).status_code == 422


def test_missing_probe_keeps_api_available(db_path):
    app = create_app(db_path=db_path, probe_factory=lambda: None)
    with TestClient(app) as client:
        status = client.get("/api/status").json()
        stats = client.get("/api/stats")

    assert status["tracker_running"] is False
    assert status["current_app"] is None
    assert stats.status_code == 200


def test_history_groups_only_the_configured_sample(db_path):
    settings = TrackerSettings(history_sample_size=2)
    client = TestClient(create_app(db_path=db_path, settings=settings, probe_factory=lambda: None))

    entries = client.get("/api/history", params={"limit": 50}).json()["entries"]

    assert [entry["app_name"] for entry in entries] == ["YouTube", "Editor"]
