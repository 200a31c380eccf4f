"""Observer events published by the tracker and the deep work gate."""

from __future__ import annotations

import itertools
import logging
import threading
from collections import deque
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

ACTIVE_WINDOW = "active-window"
SESSION_SAVED = "session-saved"
BLOCKED = "blocked"
INTERRUPTION_OPENED = "interruption-opened"
INTERRUPTION_CLOSED = "interruption-closed"

Listener = Callable[[str, Dict[str, Any]], None]


class EventBus:
    """Fan out events to listeners without waiting on or failing for them."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, name: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(name, payload)
            except Exception:
                logger.exception("Listener %r failed for event %s", listener, name)


class EventLog:
    """Bounded, sequence-numbered buffer of published events.

    Subscribe an instance to an ``EventBus`` and poll it with ``since`` to
    read events that arrived after a known sequence number.
    """

    def __init__(self, maxlen: int = 500) -> None:
        self._entries: deque[Dict[str, Any]] = deque(maxlen=maxlen)
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self, name: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            self._entries.append(
                {"seq": next(self._counter), "event": name, "payload": dict(payload)}
            )

    def since(self, after: int = 0) -> List[Dict[str, Any]]:
        with self._lock:
            return [entry for entry in self._entries if entry["seq"] > after]
