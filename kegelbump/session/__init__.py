"""Session package: configuration model and playback engine."""

from .configuration import (
    Block,
    Configuration,
    ConfigurationError,
    ExpandedPhase,
    FALLBACK_CONFIGURATION,
    MAX_REPEAT_COUNT,
    PhaseTemplate,
    PhaseType,
    expand,
    hold_rest_block,
)
from .engine import SessionEngine, SessionSnapshot, SessionState
from .formatting import format_duration
from .scheduler import QtTickScheduler, TickScheduler, TICK_INTERVAL_MS

__all__ = [
    "Block",
    "Configuration",
    "ConfigurationError",
    "ExpandedPhase",
    "FALLBACK_CONFIGURATION",
    "MAX_REPEAT_COUNT",
    "PhaseTemplate",
    "PhaseType",
    "expand",
    "hold_rest_block",
    "SessionEngine",
    "SessionSnapshot",
    "SessionState",
    "format_duration",
    "QtTickScheduler",
    "TickScheduler",
    "TICK_INTERVAL_MS",
]
