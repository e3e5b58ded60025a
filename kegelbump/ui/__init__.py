"""UI package."""

from .timer_widget import TimerWidget, IndicatorBadge
from .progress_ring import ProgressRing
from .session_editor import SessionEditorDialog, EditableBlock

__all__ = [
    "TimerWidget",
    "IndicatorBadge",
    "ProgressRing",
    "SessionEditorDialog",
    "EditableBlock",
]
