"""Duration text used by the session badges."""

from __future__ import annotations


def format_duration(seconds: int) -> str:
    """``0 → "0s"``, ``45 → "45s"``, ``125 → "2:05"``."""
    if seconds <= 0:
        return "0s"
    minutes, remainder = divmod(seconds, 60)
    if minutes == 0:
        return f"{remainder}s"
    return f"{minutes}:{remainder:02d}"
