"""QSS stylesheet and phase colors for KegelBump."""

from __future__ import annotations

from ..session.configuration import PhaseType

# ── ring colors ──────────────────────────────────────────────────────────
#    The ring track is tinted by the current phase once a session has
#    started; the progress arc is always the accent orange.

ACCENT = "#FF9500"

PHASE_COLORS: dict[PhaseType, str] = {
    PhaseType.HOLD: "#34C759",   # green
    PhaseType.REST: "#FF3B30",   # red
}

IDLE_TINT = ACCENT

PALETTE: dict[str, str] = {
    "bg":         "#000000",
    "surface":    "#1C1C1E",
    "accent":     ACCENT,
    "text":       "#FFFFFF",
    "text_muted": "#A6A6A6",
    "danger":     "#FF3B30",
    "border":     "#2C2C2E",
}


def tint_for(phase_type: PhaseType | None, *, started: bool, complete: bool) -> str:
    """Ring track color: phase color while playing, accent otherwise."""
    if not started or complete or phase_type is None:
        return IDLE_TINT
    return PHASE_COLORS.get(phase_type, IDLE_TINT)


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = dict(PALETTE)
    if palette:
        p.update(palette)
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: -apple-system, "SF Pro Rounded", "Helvetica Neue", sans-serif;
        font-size: 13px;
    }}

    QPushButton#cornerButton {{
        background-color: transparent;
        border: none;
        color: {p['text']};
        font-size: 11px;
        font-weight: 700;
        min-width: 58px;
        min-height: 58px;
    }}
    QPushButton#cornerButton:hover {{
        color: {p['accent']};
    }}

    QPushButton#stepButton {{
        background-color: transparent;
        border: none;
        color: {p['text']};
        font-size: 16px;
        font-weight: 700;
        min-width: 28px;
        min-height: 28px;
    }}

    QPushButton#addBlockButton {{
        background-color: {p['accent']};
        border: none;
        border-radius: 8px;
        color: {p['text']};
        font-size: 14px;
        font-weight: 600;
        padding: 6px 12px;
        text-align: left;
    }}

    QPushButton#deleteButton {{
        background-color: transparent;
        border: none;
        color: {p['danger']};
        font-size: 11px;
        font-weight: 700;
    }}

    QPushButton#backButton {{
        background-color: rgba(255, 255, 255, 0.08);
        border: none;
        border-radius: 12px;
        color: {p['text']};
        font-size: 14px;
        font-weight: 600;
        padding: 2px 10px;
    }}

    QLabel#badgeTitle {{
        color: rgba(255, 255, 255, 0.65);
        font-size: 8px;
        font-weight: 700;
    }}
    QLabel#badgeDetail {{
        font-size: 12px;
        font-weight: 600;
    }}
    QLabel#repsLabel {{
        font-size: 14px;
        font-weight: 600;
    }}
    QLabel#durationLabel {{
        color: {p['text_muted']};
        font-size: 12px;
        font-weight: 500;
    }}
    """
