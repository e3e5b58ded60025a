"""Feedback package."""

from .haptics import HapticsNotifier, NullHaptics, Haptics, PULSE_NAMES

__all__ = ["HapticsNotifier", "NullHaptics", "Haptics", "PULSE_NAMES"]
