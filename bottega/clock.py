"""Interval accumulator for seconds-based recurring work."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Periodic:
    """Recurring timer in seconds. Fires at most once per ``advance`` call.

    Time left over after a firing is dropped, so a long pause between calls
    produces a single firing rather than a burst.
    """

    interval: float
    elapsed: float = 0.0

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"interval must be > 0, got {self.interval}")

    def advance(self, dt: float) -> bool:
        """Accumulate *dt* seconds. Returns True when the interval is reached."""
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self.elapsed += dt
        if self.elapsed >= self.interval:
            self.elapsed = 0.0
            return True
        return False
