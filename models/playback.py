from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

TIMING_OPTIONS = (15, 30, 45, 60, 90, 120)
DEFAULT_TIMING_MINUTES = 30


class PlaybackState(Enum):
    """Playback session states."""
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass(frozen=True)
class Infinite:
    """Loop the track with no fixed end."""

    @property
    def total_seconds(self) -> int:
        return 0

    @property
    def loops(self) -> bool:
        return True

    @property
    def label(self) -> str:
        return "Infinite"


@dataclass(frozen=True)
class Timed:
    """Play until a countdown of ``minutes`` runs out, then stop."""
    minutes: int

    def __post_init__(self):
        if self.minutes not in TIMING_OPTIONS:
            raise ValueError(
                f"Timing must be one of {', '.join(map(str, TIMING_OPTIONS))} minutes, got {self.minutes!r}"
            )

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60

    @property
    def loops(self) -> bool:
        return False

    @property
    def label(self) -> str:
        return f"Timed {self.minutes} min"


PlaybackMode = Union[Infinite, Timed]


def next_timing_option(minutes: int, step: int = 1) -> int:
    """Return the timing option ``step`` places away from ``minutes``, wrapping around."""
    try:
        index = TIMING_OPTIONS.index(minutes)
    except ValueError:
        index = TIMING_OPTIONS.index(DEFAULT_TIMING_MINUTES)
    return TIMING_OPTIONS[(index + step) % len(TIMING_OPTIONS)]
