import typing
from dataclasses import dataclass, field, replace
from uuid import UUID

from whenever import Instant

from meditimer.enums import TimerPhase

if typing.TYPE_CHECKING:
    from meditimer.engine.fade import AlarmFade

    from .template import TimerTemplate


@dataclass
class TimerRunState:
    """Live, time-anchored countdown state for a started template."""

    template: "TimerTemplate"
    """Snapshot of the template at the time it was started."""

    start: Instant
    """Instant the countdown is anchored to. Moved forward on resume, never advanced while paused."""

    total_duration: float
    """Countdown length in seconds."""

    remaining: float
    """Remaining seconds as of the last recompute."""

    phase: TimerPhase = TimerPhase.RUNNING
    """Current phase of the timer."""

    alarm_volume: float = 0.0
    """Alarm volume in [0, 1], only meaningful while the alarm is ringing."""

    fade_remaining: float = 0.0
    """Seconds left until the alarm reaches full volume."""

    fade: "AlarmFade | None" = field(default=None, repr=False)
    """Volume ramp, set once the countdown completes."""

    progress: float = 0.0
    """Fraction of the countdown that has passed."""

    @property
    def template_id(self) -> UUID:
        return self.template.id

    @property
    def is_running(self) -> bool:
        return self.phase == TimerPhase.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.phase == TimerPhase.PAUSED

    @property
    def is_alarm_playing(self) -> bool:
        return self.phase == TimerPhase.ALARM

    @property
    def is_fading(self) -> bool:
        return self.is_alarm_playing and self.fade is not None and self.fade_remaining > 0

    def copy(self) -> "TimerRunState":
        """Return a shallow copy that can be handed to listeners without exposing engine internals."""
        return replace(self)

    def __repr__(self) -> str:
        return (
            f"TimerRunState(template={self.template.name!r}, phase={self.phase.value}, "
            f"remaining={self.remaining:.2f}, alarm_volume={self.alarm_volume:.2f})"
        )
