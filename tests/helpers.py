"""Shared test helpers for KegelBump."""

from kegelbump.session.engine import SessionEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualScheduler:
    """Tick source driven by hand instead of a QTimer."""

    def __init__(self):
        self._callback = None
        self.starts = 0
        self.stops = 0

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback) -> None:
        self._callback = callback
        self.starts += 1

    def stop(self) -> None:
        if self._callback is not None:
            self.stops += 1
        self._callback = None

    def fire(self, times: int = 1) -> None:
        """Deliver *times* ticks, stopping early if the source is cancelled."""
        for _ in range(times):
            if self._callback is None:
                return
            self._callback()


class RecordingHaptics:
    """Records every feedback call in order."""

    def __init__(self):
        self.calls: list[str] = []

    def tick(self) -> None:
        self.calls.append("tick")

    def phase_complete(self) -> None:
        self.calls.append("phase_complete")

    def count(self, name: str) -> int:
        return self.calls.count(name)


def run_to_completion(engine: SessionEngine, limit: int = 10_000) -> int:
    """Tick until COMPLETE and return how many ticks it took."""
    ticks = 0
    while not engine.is_complete and ticks < limit:
        engine._on_tick()
        ticks += 1
    return ticks
