"""Pure timestamp arithmetic for countdowns.

Remaining time is never accumulated from ticks. It is always derived from the absolute start instant and the
current wall-clock time, so a process that was suspended (or a ticker that was late) cannot drift.
"""

from whenever import Instant

from meditimer.utils.time_utils import seconds_between, shift


def elapsed(now: Instant, start: Instant) -> float:
    """Seconds elapsed since `start`, never negative."""
    return max(0.0, seconds_between(now, start))


def recompute(now: Instant, start: Instant, duration: float) -> float:
    """Remaining seconds of a countdown of `duration` seconds that started at `start`.

    Returns:
        `max(0, duration - (now - start))`.
    """
    return max(0.0, duration - elapsed(now, start))


def is_complete(now: Instant, start: Instant, duration: float) -> bool:
    return recompute(now, start, duration) <= 0


def progress(remaining: float, duration: float) -> float:
    """Fraction of the countdown that has passed, in [0, 1]. Zero-length countdowns are always complete."""
    if duration <= 0:
        return 1.0
    return min(1.0, max(0.0, (duration - remaining) / duration))


def resume_anchor(now: Instant, duration: float, remaining: float) -> Instant:
    """Start instant that makes `recompute(now, anchor, duration) == remaining`.

    Used when resuming a paused countdown: the time spent paused is excluded by moving the anchor forward
    rather than by tracking paused durations.
    """
    return shift(now, -(duration - remaining))
