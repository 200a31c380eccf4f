"""Focus probes: report which window currently holds user focus."""

from __future__ import annotations

import ctypes
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import psutil

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown"


@dataclass(frozen=True, slots=True)
class FocusObservation:
    """Identifying info for the foreground window at one instant."""

    title: Optional[str] = None
    owner_name: Optional[str] = None

    def resolved_title(self) -> str:
        title = self.title or self.owner_name or UNKNOWN_TITLE
        # Window text can carry lone UTF-16 surrogates that cannot be stored.
        return title.encode("utf-8", "replace").decode("utf-8")


class FocusProbe(Protocol):
    def poll(self) -> Optional[FocusObservation]:
        """Return the focused window, or None when nothing is focused."""
        ...


class WindowsFocusProbe:
    """Retrieves the foreground window title and owning process name."""

    def __init__(self) -> None:
        self._user32 = ctypes.windll.user32  # type: ignore[attr-defined]

    def poll(self) -> Optional[FocusObservation]:
        hwnd = self._user32.GetForegroundWindow()
        if not hwnd:
            return None

        length = self._user32.GetWindowTextLengthW(hwnd)
        buffer = ctypes.create_unicode_buffer(length + 1)
        self._user32.GetWindowTextW(hwnd, buffer, length + 1)
        title = buffer.value.strip() or None

        return FocusObservation(title=title, owner_name=self._owner_name(hwnd))

    def _owner_name(self, hwnd: int) -> Optional[str]:
        from ctypes import wintypes

        pid = wintypes.DWORD()
        self._user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        if not pid.value:
            return None
        try:
            return psutil.Process(pid.value).name()
        except (psutil.Error, ProcessLookupError):
            return None


def create_focus_probe() -> Optional[FocusProbe]:
    """Build the platform probe, or return None when this host has none."""
    try:
        return WindowsFocusProbe()
    except (AttributeError, OSError) as exc:
        logger.warning("Focus probe unavailable on this platform: %s", exc)
        return None
