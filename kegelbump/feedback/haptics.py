"""Haptic feedback for session playback.

The watch version plays a short click every second and a stronger
"direction up" pulse when a phase finishes.  The desktop has no haptic
engine and the app is silent, so ``HapticsNotifier`` re-emits both as a
``pulse`` signal that the progress ring renders as a flash.

Pulse names
-----------
- ``click``         — one elapsed second
- ``direction_up``  — phase finished, about to advance
"""

from __future__ import annotations

from typing import Protocol

from PyQt6.QtCore import QObject, pyqtSignal


PULSE_CLICK = "click"
PULSE_DIRECTION_UP = "direction_up"

PULSE_NAMES = (PULSE_CLICK, PULSE_DIRECTION_UP)


class Haptics(Protocol):
    def tick(self) -> None: ...

    def phase_complete(self) -> None: ...


class NullHaptics:
    """Does nothing.  Default when no notifier is injected."""

    def tick(self) -> None:
        pass

    def phase_complete(self) -> None:
        pass


class HapticsNotifier(QObject):
    """Turns engine feedback calls into ``pulse(name)`` emissions.

    Usage::

        haptics = HapticsNotifier(parent=self)
        haptics.pulse.connect(ring.flash)
        engine = SessionEngine(self, haptics=haptics)
    """

    pulse = pyqtSignal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def tick(self) -> None:
        self._play(PULSE_CLICK)

    def phase_complete(self) -> None:
        self._play(PULSE_DIRECTION_UP)

    def _play(self, name: str) -> None:
        if self._enabled:
            self.pulse.emit(name)
