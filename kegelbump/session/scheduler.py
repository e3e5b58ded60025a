"""Periodic tick sources for the session engine.

The engine never touches ``QTimer`` directly; it is handed a scheduler
with ``start(callback)`` / ``stop()``.  ``QtTickScheduler`` is the real
one.  Tests pass a manual scheduler and fire the callback themselves.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickScheduler(Protocol):
    @property
    def is_active(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class QtTickScheduler(QObject):
    """Fires *callback* once per second on the Qt event loop.

    Every ``start`` discards the previous timer and arms a fresh one.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._interval_ms = interval_ms
        self._timer: QTimer | None = None

    @property
    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def start(self, callback: Callable[[], None]) -> None:
        self.stop()
        timer = QTimer(self)
        timer.setInterval(self._interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        self._timer = timer

    def stop(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None
