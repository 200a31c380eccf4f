"""Deep work gate: suppress distractions instead of recording them."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from .events import BLOCKED, INTERRUPTION_CLOSED, INTERRUPTION_OPENED, EventBus
from .models import Category

logger = logging.getLogger(__name__)


class DeepWorkGate:
    """Holds the deep work flag and the interruption surface lifecycle.

    At most one interruption surface is active at a time. It is opened the
    first tick a distraction is intercepted and torn down when focus moves to
    a non-distraction window, when deep work is switched off, or when the
    host UI dismisses it.
    """

    def __init__(self, events: Optional[EventBus] = None, enabled: bool = False) -> None:
        self.events = events or EventBus()
        self._enabled = enabled
        self._interruption_title: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def interruption_title(self) -> Optional[str]:
        return self._interruption_title

    def set_enabled(self, enabled: bool) -> bool:
        with self._lock:
            self._enabled = bool(enabled)
            closed = None if self._enabled else self._teardown_locked()
            result = self._enabled
        logger.info("Deep work %s.", "enabled" if result else "disabled")
        if closed is not None:
            self.events.publish(INTERRUPTION_CLOSED, {"title": closed})
        return result

    def intercept(self, title: str, category: Category) -> bool:
        """Return True when the observed window must not be tracked this tick."""
        pending: list[tuple[str, Dict[str, Any]]] = []
        with self._lock:
            blocked = self._enabled and category is Category.DISTRACTION
            if blocked:
                if self._interruption_title is None:
                    self._interruption_title = title
                    pending.append((INTERRUPTION_OPENED, {"title": title}))
                pending.append((BLOCKED, {"title": title}))
            else:
                closed = self._teardown_locked()
                if closed is not None:
                    pending.append((INTERRUPTION_CLOSED, {"title": closed}))
        for name, payload in pending:
            self.events.publish(name, payload)
        return blocked

    def dismiss(self) -> bool:
        with self._lock:
            closed = self._teardown_locked()
        if closed is not None:
            self.events.publish(INTERRUPTION_CLOSED, {"title": closed})
        return True

    def _teardown_locked(self) -> Optional[str]:
        closed = self._interruption_title
        self._interruption_title = None
        return closed
