from dataclasses import dataclass

from whenever import Instant

from .reconcile import elapsed


@dataclass(frozen=True)
class AlarmFade:
    """Linear, time-anchored volume ramp for a ringing alarm.

    Volume goes from 0 at `start` to 1 at `start + duration` and stays at 1 afterwards.
    """

    start: Instant
    """Instant the alarm started ringing."""

    duration: float
    """Seconds the ramp takes to reach full volume."""

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Fade duration cannot be negative: {self.duration}")

    def volume_at(self, now: Instant) -> float:
        if self.duration <= 0:
            return 1.0

        spent = elapsed(now, self.start)
        if spent >= self.duration:
            return 1.0
        return spent / self.duration

    def remaining_at(self, now: Instant) -> float:
        return max(0.0, self.duration - elapsed(now, self.start))

    def is_complete(self, now: Instant) -> bool:
        return self.duration <= 0 or elapsed(now, self.start) >= self.duration
