"""Command-line interface for the career tracker."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import TrackerSettings, default_db_path, default_log_path
from .server_runner import run_server
from .store import SessionStore

app = typer.Typer(help="Track focused windows and measure career progress.")

DEFAULTS = TrackerSettings()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def _settings(
    poll_seconds: float, min_session: int, self_titles: Optional[List[str]]
) -> TrackerSettings:
    return TrackerSettings.from_intervals(
        poll_seconds=poll_seconds,
        min_session_seconds=min_session,
        self_window_markers=tuple(self_titles) if self_titles else None,
    )


@app.command()
def track(
    db_path: Optional[Path] = typer.Option(
        None,
        "--db",
        path_type=Path,
        help="Location of the session SQLite database.",
    ),
    poll_seconds: float = typer.Option(
        2.0,
        "--interval",
        min=0.5,
        help="Polling interval in seconds.",
    ),
    min_session: int = typer.Option(
        2,
        "--min-session",
        min=0,
        help="Sessions shorter than this many seconds are discarded.",
    ),
    self_titles: Optional[List[str]] = typer.Option(
        None,
        "--self-title",
        help="Window title fragment identifying this tracker (repeatable).",
    ),
    deep_work: bool = typer.Option(
        False, "--deep-work", help="Start with deep work mode enabled."
    ),
) -> None:
    """Run the session tracker until interrupted."""
    from .probe import create_focus_probe
    from .tracker import SessionTracker

    file_handler = logging.FileHandler(default_log_path(), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)

    store = SessionStore(db_path or default_db_path())
    probe = create_focus_probe()
    if probe is None:
        typer.echo("No focus probe is available on this platform; nothing to track.", err=True)
        raise typer.Exit(code=1)

    tracker = SessionTracker(
        store, _settings(poll_seconds, min_session, self_titles), probe=probe
    )
    tracker.events.subscribe(_echo_event)
    if deep_work:
        tracker.gate.set_enabled(True)
    tracker.run_forever()


def _echo_event(name: str, payload: dict) -> None:
    details = " ".join(f"{key}={value}" for key, value in payload.items())
    typer.echo(f"[{name}] {details}")


@app.command()
def today(
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the session SQLite database."
    ),
) -> None:
    """Print today's totals per category."""
    from .reporting import SummaryPrinter

    SummaryPrinter(SessionStore(db_path or default_db_path())).print_today()


@app.command()
def trend(
    days: int = typer.Option(DEFAULTS.trend_days, "--days", min=1, help="Days to look back."),
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the session SQLite database."
    ),
) -> None:
    """Print per-day category totals."""
    from .reporting import SummaryPrinter

    SummaryPrinter(SessionStore(db_path or default_db_path())).print_trend(days)


@app.command()
def history(
    limit: int = typer.Option(
        DEFAULTS.history_limit, "--limit", min=1, help="Maximum rows to print."
    ),
    sample_size: int = typer.Option(
        DEFAULTS.history_sample_size,
        "--sample",
        min=1,
        help="Number of most recent sessions to group.",
    ),
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the session SQLite database."
    ),
) -> None:
    """Print recent time per app and day."""
    from .reporting import SummaryPrinter

    SummaryPrinter(SessionStore(db_path or default_db_path())).print_history(
        limit=limit, sample_size=sample_size
    )


@app.command()
def xp(
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the session SQLite database."
    ),
) -> None:
    """Print cumulative learning and productive time."""
    from .reporting import SummaryPrinter

    SummaryPrinter(SessionStore(db_path or default_db_path())).print_career()


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the API."
    ),
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the session SQLite database."
    ),
    poll_seconds: float = typer.Option(
        2.0,
        "--interval",
        min=0.5,
        help="Polling interval in seconds.",
    ),
    min_session: int = typer.Option(
        2,
        "--min-session",
        min=0,
        help="Sessions shorter than this many seconds are discarded.",
    ),
    self_titles: Optional[List[str]] = typer.Option(
        None,
        "--self-title",
        help="Window title fragment identifying this tracker (repeatable).",
    ),
    deep_work: bool = typer.Option(
        False, "--deep-work", help="Start with deep work mode enabled."
    ),
) -> None:
    """Start the query API with the background tracker."""
    run_server(
        host=host,
        port=port,
        db_path=db_path or default_db_path(),
        settings=_settings(poll_seconds, min_session, self_titles),
        deep_work=deep_work,
    )


if __name__ == "__main__":
    app()
