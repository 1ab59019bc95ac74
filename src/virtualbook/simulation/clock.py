"""Virtual clock - simulated time advanced by wall-clock deltas times a speed multiplier."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

MINUTE_MS = 60_000
# At speed 1, one wall second is one virtual minute
VIRTUAL_MS_PER_WALL_MS = 60


def align_to_minute(ts_ms: int) -> int:
    return ts_ms - ts_ms % MINUTE_MS


@dataclass
class VirtualClock:
    """Virtual timestamp (ms epoch), speed multiplier and play/pause flag.

    Pausing is the ``playing`` flag; ``speed`` is always positive.
    """

    now_ms: int
    speed: float = 1.0
    playing: bool = True
    # Sub-millisecond remainder carried between ticks
    _carry_ms: float = field(default=0.0, repr=False)

    def advance(self, wall_delta_ms: float) -> int:
        """Advance by wall_delta_ms * speed * 60 when playing. Returns virtual ms advanced."""
        if not self.playing or wall_delta_ms <= 0:
            return 0
        exact = wall_delta_ms * self.speed * VIRTUAL_MS_PER_WALL_MS + self._carry_ms
        step = int(exact)
        self._carry_ms = exact - step
        self.now_ms += step
        return step

    def jump(self, minutes: int = 15) -> int:
        """Advance by whole virtual minutes regardless of the playing flag."""
        step = minutes * MINUTE_MS
        self.now_ms += step
        return step

    def set_speed(self, speed: float) -> bool:
        """Set the multiplier. Non-positive or non-finite values are refused."""
        if not math.isfinite(speed) or speed <= 0:
            return False
        self.speed = speed
        return True
