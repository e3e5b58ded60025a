"""Circular countdown ring rendered with QPainter.

The ring is the whole watch face:
- A full-circle track tinted by the current phase (hold=green, rest=red,
  accent orange when idle or complete).
- An accent arc that fills clockwise from 12 o'clock as the phase runs.
- The remaining seconds, large, in the centre.
- The "done/total" repetition count above the number.
- A brief flash whenever a haptic pulse arrives.
- Long-pressing the centre emits ``long_pressed`` (opens the editor).
"""

from __future__ import annotations

import math

from PyQt6.QtCore import (
    Qt, QRectF, QPointF, QTimer, QVariantAnimation, QEasingCurve, pyqtSignal,
)
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget

from ..feedback.haptics import PULSE_DIRECTION_UP
from .styles import ACCENT, IDLE_TINT


# ── helpers ──────────────────────────────────────────────────────────────────

def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


# ── main widget ──────────────────────────────────────────────────────────────


class ProgressRing(QWidget):
    """Custom-painted phase ring."""

    long_pressed = pyqtSignal()

    RING_DIAMETER = 260
    LINE_WIDTH_RATIO = 0.12   # stroke width as a share of the diameter
    LONG_PRESS_MS = 600
    FLASH_DECAY = 0.08        # flash intensity lost per frame

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 20, self.RING_DIAMETER + 20)

        # ── state ──────────────────────────────────────────────────────
        self._percent: float = 0.0
        self._display_percent: float = 0.0
        self._number_text: str = "0"
        self._reps_text: str = "0/0"
        self._flash: float = 0.0

        self._tint = QColor(IDLE_TINT)
        self._old_tint = QColor(IDLE_TINT)
        self._target_tint = QColor(IDLE_TINT)
        self._arc_color = QColor(ACCENT)
        self._text_color = QColor("#FFFFFF")

        # ── arc animation ──────────────────────────────────────────────
        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.setDuration(200)
        self._arc_anim.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

        # ── tint animation ─────────────────────────────────────────────
        self._tint_anim = QVariantAnimation(self)
        self._tint_anim.setDuration(350)
        self._tint_anim.setStartValue(0.0)
        self._tint_anim.setEndValue(1.0)
        self._tint_anim.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._tint_anim.valueChanged.connect(self._on_tint_anim)

        # ── haptic flash ───────────────────────────────────────────────
        self._flash_timer = QTimer(self)
        self._flash_timer.setInterval(16)
        self._flash_timer.timeout.connect(self._on_flash_tick)

        # ── long press ─────────────────────────────────────────────────
        self._press_timer = QTimer(self)
        self._press_timer.setSingleShot(True)
        self._press_timer.setInterval(self.LONG_PRESS_MS)
        self._press_timer.timeout.connect(self.long_pressed.emit)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def number_text(self) -> str:
        return self._number_text

    @property
    def reps_text(self) -> str:
        return self._reps_text

    @property
    def tint(self) -> QColor:
        """Where the track color is heading (ignores animation)."""
        return QColor(self._target_tint)

    def set_percent(self, pct: float) -> None:
        """Update the arc fill (0..1).  Animates forward, snaps back."""
        pct = max(0.0, min(1.0, pct))
        self._percent = pct
        self._arc_anim.stop()
        if pct < self._display_percent:
            self._display_percent = pct
            self.update()
            return
        self._arc_anim.setStartValue(self._display_percent)
        self._arc_anim.setEndValue(pct)
        self._arc_anim.start()

    def set_number(self, seconds: int) -> None:
        self._number_text = str(seconds)
        self.update()

    def set_reps_text(self, text: str) -> None:
        self._reps_text = text
        self.update()

    def set_tint(self, color: str) -> None:
        target = QColor(color)
        if target == self._target_tint:
            return
        self._old_tint = QColor(self._tint)
        self._target_tint = target
        self._tint_anim.stop()
        self._tint_anim.start()

    def flash(self, pulse_name: str) -> None:
        """Visual stand-in for a haptic pulse."""
        self._flash = 1.0 if pulse_name == PULSE_DIRECTION_UP else 0.45
        if not self._flash_timer.isActive():
            self._flash_timer.start()
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_arc_anim(self, value: object) -> None:
        self._display_percent = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_tint_anim(self, value: object) -> None:
        t = float(value)  # type: ignore[arg-type]
        self._tint = _lerp_color(self._old_tint, self._target_tint, t)
        self.update()

    def _on_flash_tick(self) -> None:
        self._flash = max(0.0, self._flash - self.FLASH_DECAY)
        if self._flash <= 0.0:
            self._flash_timer.stop()
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  MOUSE
    # ══════════════════════════════════════════════════════════════════

    def _in_centre(self, pos: QPointF) -> bool:
        cx, cy = self.width() / 2, self.height() / 2
        inner = (min(self.width(), self.height()) / 2) * 0.6
        return math.hypot(pos.x() - cx, pos.y() - cy) <= inner

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if (
            event.button() == Qt.MouseButton.LeftButton
            and self._in_centre(event.position())
        ):
            self._press_timer.start()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        self._press_timer.stop()
        super().mouseReleaseEvent(event)

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        cx, cy = w / 2, h / 2
        size = min(w, h)
        line_width = size * self.LINE_WIDTH_RATIO
        diameter = max(60.0, size - line_width - 4)
        radius = diameter / 2

        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── tinted track ─────────────────────────────────────────────
        track_pen = QPen(self._tint, line_width, Qt.PenStyle.SolidLine)
        track_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(track_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(ring_rect)

        # ── progress arc ─────────────────────────────────────────────
        pct = self._display_percent
        if pct > 0.001:
            arc_pen = QPen(self._arc_color, line_width, Qt.PenStyle.SolidLine)
            arc_pen.setCapStyle(Qt.PenCapStyle.FlatCap)
            arc_pen.setJoinStyle(Qt.PenJoinStyle.MiterJoin)
            painter.setPen(arc_pen)
            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            painter.drawArc(ring_rect, 90 * 16, -int(pct * 360 * 16))

        # ── haptic flash ─────────────────────────────────────────────
        if self._flash > 0.0:
            glow = QColor("#FFFFFF")
            glow.setAlpha(int(120 * self._flash))
            glow_pen = QPen(glow, line_width * 0.5, Qt.PenStyle.SolidLine)
            painter.setPen(glow_pen)
            painter.drawEllipse(ring_rect)

        # ── centre number ────────────────────────────────────────────
        number_font = QFont()
        number_font.setPixelSize(max(12, int(size * 0.33)))
        number_font.setWeight(QFont.Weight.DemiBold)
        painter.setFont(number_font)
        painter.setPen(self._text_color)
        painter.drawText(ring_rect, Qt.AlignmentFlag.AlignCenter, self._number_text)

        # ── repetitions (north) ──────────────────────────────────────
        reps_font = QFont()
        reps_font.setPixelSize(11)
        reps_font.setWeight(QFont.Weight.Bold)
        painter.setFont(reps_font)
        reps_rect = QRectF(ring_rect)
        reps_rect.moveTop(ring_rect.top() - radius * 0.55)
        painter.drawText(reps_rect, Qt.AlignmentFlag.AlignCenter, self._reps_text)

        painter.end()
