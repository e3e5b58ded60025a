"""Session configuration model and expansion.

A ``Configuration`` is an ordered list of ``Block`` objects.  Each block
repeats its phase templates ``repeat_count`` times.  ``expand`` flattens
the whole thing into the playback timeline::

    Configuration([Block(2, [hold 3, rest 2])])
        → hold 3 (set 1), rest 2 (set 1), hold 3 (set 2), rest 2 (set 2)

Persisted shape (``to_dict`` / ``from_dict``)::

    {"blocks": [{"repeatCount": 10,
                 "phases": [{"type": "hold", "duration": 7},
                            {"type": "rest", "duration": 7}]}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConfigurationError(ValueError):
    """Raised when a persisted configuration cannot be decoded."""


# Upper bound on a block's repeats; the expanded timeline is built eagerly.
MAX_REPEAT_COUNT = 999


# ── enums ─────────────────────────────────────────────────────────────────


class PhaseType(Enum):
    HOLD = "hold"
    REST = "rest"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# ── templates ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PhaseTemplate:
    """One timed segment inside a block (clamped to at least 1 s)."""

    type: PhaseType
    duration: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", max(1, int(self.duration)))


@dataclass(frozen=True)
class Block:
    """A phase list repeated ``repeat_count`` times (0 = skipped, capped at
    ``MAX_REPEAT_COUNT``)."""

    repeat_count: int
    phases: tuple[PhaseTemplate, ...] = ()

    def __post_init__(self) -> None:
        repeat_count = min(MAX_REPEAT_COUNT, max(0, int(self.repeat_count)))
        object.__setattr__(self, "repeat_count", repeat_count)
        object.__setattr__(self, "phases", tuple(self.phases))


@dataclass(frozen=True)
class ExpandedPhase:
    """A concrete phase on the playback timeline."""

    type: PhaseType
    duration: int
    set_index: int            # 1-based repetition number across all blocks
    total_sets: int
    phase_position_in_set: int  # 0-based
    phase_count_in_set: int


@dataclass(frozen=True)
class Configuration:
    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))

    # ── derived ───────────────────────────────────────────────────────

    @property
    def total_sets(self) -> int:
        return sum(block.repeat_count for block in self.blocks)

    @property
    def total_duration(self) -> int:
        """Seconds for a full run of the expanded timeline."""
        return sum(phase.duration for phase in self.expanded_phases())

    def expanded_phases(self) -> list[ExpandedPhase]:
        return expand(self)

    # ── codec ─────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "blocks": [
                {
                    "repeatCount": block.repeat_count,
                    "phases": [
                        {"type": phase.type.value, "duration": phase.duration}
                        for phase in block.phases
                    ],
                }
                for block in self.blocks
            ]
        }

    @classmethod
    def from_dict(cls, data: Any) -> Configuration:
        """Decode the persisted shape.  A bare list of blocks is accepted too."""
        if isinstance(data, dict):
            raw_blocks = data.get("blocks")
        else:
            raw_blocks = data
        if not isinstance(raw_blocks, list):
            raise ConfigurationError("expected a list of blocks")
        return cls(tuple(_block_from_dict(item) for item in raw_blocks))


def _block_from_dict(data: Any) -> Block:
    if not isinstance(data, dict):
        raise ConfigurationError(f"block must be an object, got {data!r}")
    try:
        repeat_count = int(data["repeatCount"])
        raw_phases = data["phases"]
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise ConfigurationError(f"invalid block {data!r}") from exc
    if not isinstance(raw_phases, list):
        raise ConfigurationError("block phases must be a list")
    return Block(repeat_count, tuple(_phase_from_dict(p) for p in raw_phases))


def _phase_from_dict(data: Any) -> PhaseTemplate:
    try:
        return PhaseTemplate(PhaseType(data["type"]), int(data["duration"]))
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise ConfigurationError(f"invalid phase {data!r}") from exc


# ── expansion ─────────────────────────────────────────────────────────────


def expand(configuration: Configuration) -> list[ExpandedPhase]:
    """Flatten *configuration* into the ordered playback timeline."""
    total_sets = sum(max(0, block.repeat_count) for block in configuration.blocks)
    items: list[ExpandedPhase] = []
    if total_sets <= 0:
        return items

    set_counter = 0
    for block in configuration.blocks:
        if block.repeat_count <= 0:
            continue
        count = len(block.phases)
        for _ in range(block.repeat_count):
            set_counter += 1
            for position, template in enumerate(block.phases):
                items.append(ExpandedPhase(
                    type=template.type,
                    duration=template.duration,
                    set_index=set_counter,
                    total_sets=total_sets,
                    phase_position_in_set=position,
                    phase_count_in_set=count,
                ))
    return items


def hold_rest_block(repeat_count: int, hold: int, rest: int) -> Block:
    """Shorthand for the common hold-then-rest block."""
    return Block(repeat_count, (
        PhaseTemplate(PhaseType.HOLD, hold),
        PhaseTemplate(PhaseType.REST, rest),
    ))


# ── constants ─────────────────────────────────────────────────────────────

FALLBACK_CONFIGURATION = Configuration((
    hold_rest_block(10, 7, 7),
    hold_rest_block(10, 2, 2),
))
