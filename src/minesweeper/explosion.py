"""
Explosion animation timeline.

The session only records when a mine went off. Renderers turn the time
since that marker into ticks and ask which explosion frame to draw.
"""
import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExplosionAnimation:
    """
    Fixed-length animation cycling through mine images.

    Attributes:
        duration_ticks: Last tick at which a frame is drawn.
        ticks_per_frame: Ticks each image stays on screen.
        frame_count: Number of images in the cycle.
    """

    duration_ticks: int = 30
    ticks_per_frame: int = 3
    frame_count: int = 10

    def __post_init__(self) -> None:
        if self.duration_ticks < 0:
            raise ValueError("duration_ticks cannot be negative")
        if self.ticks_per_frame < 1 or self.frame_count < 1:
            raise ValueError("ticks_per_frame and frame_count must be positive")

    def frame_at(self, ticks: int) -> Optional[int]:
        """
        Frame index to draw ``ticks`` after the explosion.

        Returns:
            Index in ``range(frame_count)``, or None before the explosion
            and once the animation has finished.
        """
        if ticks < 0 or self.is_finished(ticks):
            return None
        return (ticks // self.ticks_per_frame) % self.frame_count

    def is_finished(self, ticks: int) -> bool:
        return ticks > self.duration_ticks


DEFAULT_EXPLOSION = ExplosionAnimation()


def ticks_between(start: float, now: float, tick_rate: float) -> int:
    """Whole ticks elapsed between two clock readings at ``tick_rate`` Hz."""
    if tick_rate <= 0:
        raise ValueError("tick_rate must be positive")
    return math.floor((now - start) * tick_rate)
