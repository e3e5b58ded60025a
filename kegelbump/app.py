"""Main application window for KegelBump."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QDialog, QMainWindow, QWidget, QVBoxLayout

from .feedback.haptics import HapticsNotifier
from .session.configuration import Configuration
from .session.engine import SessionEngine
from .session.scheduler import TickScheduler
from .storage import load_configuration, save_configuration
from .ui.session_editor import SessionEditorDialog
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


class KegelBumpApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        *,
        configuration: Configuration | None = None,
        scheduler: TickScheduler | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("KegelBump")
        self.setMinimumSize(420, 400)
        self.resize(440, 420)
        self.setStyleSheet(build_stylesheet())

        # ── engine ────────────────────────────────────────────────────
        if configuration is None:
            configuration = load_configuration()
        self._haptics = HapticsNotifier(parent=self)
        self._engine = SessionEngine(
            self,
            configuration=configuration,
            scheduler=scheduler,
            haptics=self._haptics,
        )

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._timer_widget = TimerWidget(
            self._engine, central, haptics=self._haptics,
        )
        self._timer_widget.editor_requested.connect(self.open_editor)
        layout.addWidget(self._timer_widget)

        self._setup_shortcuts()

    # ── properties ────────────────────────────────────────────────────

    @property
    def engine(self) -> SessionEngine:
        return self._engine

    @property
    def haptics(self) -> HapticsNotifier:
        return self._haptics

    # ── editor ────────────────────────────────────────────────────────

    def open_editor(self) -> None:
        dialog = SessionEditorDialog(self._engine.configuration, self)
        dialog.setStyleSheet(self.styleSheet())
        if dialog.exec() == QDialog.DialogCode.Accepted.value:
            self.apply_configuration(dialog.configuration())

    def apply_configuration(self, configuration: Configuration) -> None:
        """Persist (best effort) and hand the routine to the engine."""
        if not save_configuration(configuration):
            logger.warning("Continuing with unsaved session configuration")
        self._engine.load_configuration(configuration)

    # ── shortcuts ─────────────────────────────────────────────────────

    def _setup_shortcuts(self) -> None:
        toggle = QAction("Start/Pause", self)
        toggle.setShortcut(QKeySequence("Space"))
        toggle.triggered.connect(self._engine.toggle_running)
        self.addAction(toggle)

        reset = QAction("Reset", self)
        reset.setShortcut(QKeySequence("R"))
        reset.triggered.connect(self._engine.reset)
        self.addAction(reset)

        edit = QAction("Customize…", self)
        edit.setShortcut(QKeySequence("Ctrl+E"))
        edit.triggered.connect(self.open_editor)
        self.addAction(edit)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._engine.reset()
        super().closeEvent(event)
