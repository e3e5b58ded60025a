"""Session face — the main window content.

Layout (compass around the ring):
    - north:  repetitions done / total (painted by the ring)
    - west:   Start / Pause
    - east:   Reset
    - south:  "LEFT" badge with the session time remaining
    - centre: seconds left in the phase; long-press opens the editor
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QSizePolicy,
)

from ..feedback.haptics import HapticsNotifier
from ..session.engine import SessionEngine, SessionSnapshot
from .progress_ring import ProgressRing
from .styles import tint_for


class IndicatorBadge(QWidget):
    """Small two-line badge: uppercase title over a value."""

    def __init__(self, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(1)

        self._title = QLabel(title.upper(), self)
        self._title.setObjectName("badgeTitle")
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._detail = QLabel("", self)
        self._detail.setObjectName("badgeDetail")
        self._detail.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout.addWidget(self._title)
        layout.addWidget(self._detail)
        self.setFixedSize(60, 36)

    def set_detail(self, text: str) -> None:
        self._detail.setText(text)

    def detail(self) -> str:
        return self._detail.text()


class TimerWidget(QWidget):
    """The ring, its corner controls and the time-left badge."""

    editor_requested = pyqtSignal()

    def __init__(
        self,
        engine: SessionEngine,
        parent: QWidget | None = None,
        *,
        haptics: HapticsNotifier | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals(haptics)
        self._render(engine.snapshot())

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(4)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── ring row: west button | ring | east button ───────────────
        ring_row = QHBoxLayout()
        ring_row.setSpacing(4)
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("▶\nSTART", self)
        self._start_pause_btn.setObjectName("cornerButton")

        self._ring = ProgressRing(self)
        self._ring.setSizePolicy(
            QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed,
        )
        self._ring.setFixedSize(280, 280)

        self._reset_btn = QPushButton("↺\nRESET", self)
        self._reset_btn.setObjectName("cornerButton")

        ring_row.addWidget(self._start_pause_btn)
        ring_row.addWidget(self._ring)
        ring_row.addWidget(self._reset_btn)
        root.addLayout(ring_row)

        # ── south badge ──────────────────────────────────────────────
        badge_row = QHBoxLayout()
        badge_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._left_badge = IndicatorBadge("Left", self)
        badge_row.addWidget(self._left_badge)
        root.addLayout(badge_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self, haptics: HapticsNotifier | None) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle_running)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._ring.long_pressed.connect(self.editor_requested.emit)

        self._engine.changed.connect(self._render)
        if haptics is not None:
            haptics.pulse.connect(self._ring.flash)

    # ── slots ─────────────────────────────────────────────────────────────

    def _render(self, snap: SessionSnapshot) -> None:
        if snap.is_running:
            self._start_pause_btn.setText("⏸\nPAUSE")
        else:
            self._start_pause_btn.setText("▶\nSTART")

        phase_type = snap.current_phase.type if snap.current_phase else None
        self._ring.set_tint(tint_for(
            phase_type,
            started=snap.session_started,
            complete=snap.is_complete,
        ))
        self._ring.set_percent(snap.progress)
        self._ring.set_number(snap.display_seconds)
        self._ring.set_reps_text(snap.completed_repetitions_text)
        self._left_badge.set_detail(snap.remaining_text)
