"""Session playback state machine for KegelBump.

States
------
IDLE       Loaded, not started.  Shows the first phase's full duration.
RUNNING    Counting down the current phase, one tick per second.
PAUSED     Frozen at the current phase / remaining seconds.
COMPLETE   Every phase has run.  Starting again resets first.

Transitions
-----------
IDLE → RUNNING                     (start; no-op with an empty timeline)
RUNNING → PAUSED                   (pause)
PAUSED → RUNNING                   (resume)
RUNNING → COMPLETE                 (last phase reaches 0)
COMPLETE → RUNNING                 (start, via reset)
Any → IDLE                         (reset / load_configuration)

Tick rules
----------
Each tick is one elapsed second.  ``haptics.tick()`` fires, ``remaining``
drops by one, and once it is 0 the phase is finished:
``haptics.phase_complete()`` fires and the engine moves to the next phase
(``remaining`` = its full duration) or to COMPLETE.  The phase ends on the
tick that brings ``remaining`` to 0, so a phase of N seconds lasts exactly
N ticks and a full run takes ``total_duration`` ticks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..feedback.haptics import Haptics, NullHaptics
from .configuration import Configuration, ExpandedPhase, FALLBACK_CONFIGURATION
from .formatting import format_duration
from .scheduler import QtTickScheduler, TickScheduler


# ── enums ─────────────────────────────────────────────────────────────────


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a view needs, captured at one instant."""

    state: SessionState
    session_started: bool
    current_index: int
    remaining_seconds: int
    display_seconds: int
    progress: float
    phase_name: str
    current_phase: ExpandedPhase | None
    next_phase: ExpandedPhase | None
    completed_repetitions: int
    total_sets: int
    session_remaining_seconds: int
    session_elapsed_seconds: int

    @property
    def is_running(self) -> bool:
        return self.state == SessionState.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.state == SessionState.COMPLETE

    @property
    def completed_repetitions_text(self) -> str:
        return f"{self.completed_repetitions}/{self.total_sets}"

    @property
    def remaining_text(self) -> str:
        return format_duration(self.session_remaining_seconds)

    @property
    def elapsed_text(self) -> str:
        return format_duration(self.session_elapsed_seconds)


# ── engine ────────────────────────────────────────────────────────────────


class SessionEngine(QObject):
    """Walks an expanded phase timeline on a one-second tick.

    Signals
    -------
    changed(snapshot: SessionSnapshot)
        Emitted after every state-mutating call (start, pause, reset,
        tick, load_configuration).
    state_changed(new_state: SessionState)
        Emitted on every state transition.
    tick(remaining_seconds: int)
        Emitted after each processed tick.
    phase_completed(phase: ExpandedPhase)
        Emitted when a phase finishes, before advancing.
    session_completed()
        Emitted once when the last phase finishes.
    """

    changed = pyqtSignal(object)
    state_changed = pyqtSignal(object)
    tick = pyqtSignal(int)
    phase_completed = pyqtSignal(object)
    session_completed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        configuration: Configuration = FALLBACK_CONFIGURATION,
        scheduler: TickScheduler | None = None,
        haptics: Haptics | None = None,
    ) -> None:
        super().__init__(parent)

        self._scheduler: TickScheduler = scheduler or QtTickScheduler(self)
        self._haptics: Haptics = haptics or NullHaptics()

        # ── configuration ─────────────────────────────────────────────
        self._configuration: Configuration = configuration
        self._phases: list[ExpandedPhase] = []
        self._total_duration: int = 0

        # ── playback state ────────────────────────────────────────────
        self._state: SessionState = SessionState.IDLE
        self._index: int = 0
        self._remaining: int = 0
        self._started: bool = False

        self._apply_configuration(configuration)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def phases(self) -> tuple[ExpandedPhase, ...]:
        return tuple(self._phases)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._remaining

    @property
    def total_duration(self) -> int:
        """Seconds for the whole timeline, fixed at load time."""
        return self._total_duration

    @property
    def session_started(self) -> bool:
        return self._started

    @property
    def is_running(self) -> bool:
        return self._state == SessionState.RUNNING

    @property
    def is_complete(self) -> bool:
        return self._state == SessionState.COMPLETE

    @property
    def current_phase(self) -> ExpandedPhase | None:
        if 0 <= self._index < len(self._phases):
            return self._phases[self._index]
        return None

    @property
    def next_phase(self) -> ExpandedPhase | None:
        nxt = self._index + 1
        if 0 <= nxt < len(self._phases):
            return self._phases[nxt]
        return None

    # ── derived display values ────────────────────────────────────────

    @property
    def total_sets(self) -> int:
        if not self._phases:
            return 0
        return self._phases[-1].total_sets

    @property
    def completed_repetitions(self) -> int:
        """A repetition counts once the engine has moved past its phases."""
        if self.is_complete:
            return self.total_sets
        phase = self.current_phase
        if not self._started or phase is None:
            return 0
        return max(0, phase.set_index - 1)

    @property
    def session_remaining_seconds(self) -> int:
        if not self._phases:
            return 0
        future = sum(p.duration for p in self._phases[self._index + 1:])
        return future + self._remaining

    @property
    def session_elapsed_seconds(self) -> int:
        return max(0, self._total_duration - self.session_remaining_seconds)

    @property
    def progress(self) -> float:
        """0.0 → 1.0 through the current phase."""
        phase = self.current_phase
        if self.is_complete or not self._started or phase is None:
            return 0.0
        if phase.duration <= 0:
            return 0.0
        elapsed = phase.duration - self._remaining
        return max(0.0, min(1.0, elapsed / phase.duration))

    @property
    def display_seconds(self) -> int:
        if self.is_complete:
            return 0
        if self._started:
            return self._remaining
        phase = self.current_phase
        return phase.duration if phase is not None else 0

    @property
    def phase_name(self) -> str:
        if self.is_complete:
            return "Complete"
        phase = self.current_phase
        if phase is not None:
            return phase.type.label
        return "Ready"

    @property
    def next_phase_title(self) -> str:
        phase = self.next_phase
        return phase.type.label if phase is not None else "Next"

    @property
    def next_phase_detail(self) -> str:
        phase = self.next_phase
        return f"{phase.duration}s" if phase is not None else "--"

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self._state,
            session_started=self._started,
            current_index=self._index,
            remaining_seconds=self._remaining,
            display_seconds=self.display_seconds,
            progress=self.progress,
            phase_name=self.phase_name,
            current_phase=self.current_phase,
            next_phase=self.next_phase,
            completed_repetitions=self.completed_repetitions,
            total_sets=self.total_sets,
            session_remaining_seconds=self.session_remaining_seconds,
            session_elapsed_seconds=self.session_elapsed_seconds,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def toggle_running(self) -> None:
        """The start/pause button.  Restarts from the top when complete."""
        if self.is_complete:
            self.reset()
        if self.is_running:
            self.pause()
        else:
            self.start()

    def start(self) -> None:
        """Start from IDLE or resume from PAUSED."""
        if self.is_running or not self._phases:
            return
        if self.is_complete:
            self._reset_state()
        self._started = True
        self._scheduler.start(self._on_tick)
        self._set_state(SessionState.RUNNING)
        self._notify()

    def resume(self) -> None:
        if self._state != SessionState.PAUSED:
            return
        self.start()

    def pause(self) -> None:
        if not self.is_running:
            return
        self._scheduler.stop()
        self._set_state(SessionState.PAUSED)
        self._notify()

    def reset(self) -> None:
        """Back to IDLE at phase 0.  Safe from any state."""
        self._reset_state()
        self._notify()

    def load_configuration(self, configuration: Configuration) -> None:
        """Replace the routine.  Always resets, even mid-session."""
        self._apply_configuration(configuration)
        self._notify()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if not self.is_running:
            return

        self._haptics.tick()

        if self._remaining > 0:
            self._remaining -= 1

        if self._remaining <= 0:
            self._advance_phase()

        self.tick.emit(self._remaining)
        self._notify()

    def _advance_phase(self) -> None:
        finished = self.current_phase
        self._haptics.phase_complete()
        if finished is not None:
            self.phase_completed.emit(finished)

        if self._index + 1 < len(self._phases):
            self._index += 1
            self._remaining = self._phases[self._index].duration
        else:
            self._complete_session()

    def _complete_session(self) -> None:
        self._scheduler.stop()
        self._remaining = 0
        self._set_state(SessionState.COMPLETE)
        self.session_completed.emit()

    def _apply_configuration(self, configuration: Configuration) -> None:
        self._configuration = configuration
        self._phases = configuration.expanded_phases()
        self._total_duration = sum(p.duration for p in self._phases)
        self._reset_state()

    def _reset_state(self) -> None:
        self._scheduler.stop()
        self._started = False
        self._index = 0
        self._remaining = self._phases[0].duration if self._phases else 0
        self._set_state(SessionState.IDLE)

    def _set_state(self, new_state: SessionState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        self.state_changed.emit(new_state)

    def _notify(self) -> None:
        self.changed.emit(self.snapshot())
