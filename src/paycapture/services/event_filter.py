"""
Event filter and cooldown guard.

Decides whether an incoming accessibility event may start a detection. The
filter itself holds no per-event state; it only reads the shared
CooldownState, which the detection pipeline stamps after a successful
detection. The cooldown is global across source apps.

Rejections are silent: a rejected event is the common case, not an error.
"""

from __future__ import annotations

import threading

from paycapture.config import DEFAULT_COOLDOWN_MS
from paycapture.model.ui_event import EventKind, SourceApp, UiEvent

RECOGNIZED_KINDS = frozenset(kind.value for kind in EventKind)


class CooldownState:
    """Time of the last successful detection, guarded by a lock.

    Starts empty, so the first detection is never held back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_detection_ms: int | None = None

    @property
    def last_detection_ms(self) -> int | None:
        with self._lock:
            return self._last_detection_ms

    def stamp(self, now_ms: int) -> None:
        with self._lock:
            self._last_detection_ms = now_ms

    def is_cooling_down(self, now_ms: int, interval_ms: int) -> bool:
        with self._lock:
            if self._last_detection_ms is None:
                return False
            return now_ms - self._last_detection_ms < interval_ms


class EventFilter:
    """Accepts recognized window events from known payment apps outside the cooldown."""

    def __init__(self, cooldown: CooldownState | None = None, cooldown_ms: int = DEFAULT_COOLDOWN_MS):
        self.cooldown = cooldown if cooldown is not None else CooldownState()
        self.cooldown_ms = cooldown_ms

    def accept(self, event: UiEvent, now_ms: int) -> SourceApp | None:
        """Return the resolved source app, or None when the event is rejected."""
        if event.kind not in RECOGNIZED_KINDS:
            return None
        app = SourceApp.from_package(event.package_name)
        if app is SourceApp.unknown:
            return None
        if self.cooldown.is_cooling_down(now_ms, self.cooldown_ms):
            return None
        return app


__all__ = ["CooldownState", "EventFilter", "RECOGNIZED_KINDS"]
