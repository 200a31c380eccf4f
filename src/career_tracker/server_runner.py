"""Helpers to launch the local query API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import uvicorn

from .config import TrackerSettings, default_db_path
from .webapp import create_app


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    db_path: Optional[Path] = None,
    settings: Optional[TrackerSettings] = None,
    deep_work: bool = False,
    log_level: str = "info",
) -> None:
    """Start the FastAPI app; the tracker runs for as long as the server does."""
    app = create_app(
        db_path=db_path or default_db_path(),
        settings=settings or TrackerSettings(),
    )
    if deep_work:
        app.state.gate.set_enabled(True)

    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)
