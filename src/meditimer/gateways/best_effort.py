"""Adapters that make gateway calls non-fatal.

Audio session failures, denied notification permissions and missing sound assets must never stop a countdown,
so every call is wrapped, logged and dropped.
"""

from collections.abc import Callable
from typing import Any
from uuid import UUID

from meditimer.core.base import MeditimerBase
from meditimer.enums import SoundOption
from meditimer.logging_ import LOG_LEVELS

from .base import AudioGateway, NotificationGateway


class _BestEffort(MeditimerBase):
    failures: int
    """Number of calls that raised and were skipped."""

    def __init__(self, log_level: LOG_LEVELS | None = None) -> None:
        super().__init__(log_level=log_level)
        self.failures = 0

    def _call(self, name: str, func: Callable[..., Any], *args: Any) -> bool:
        """Call `func`, returning False instead of raising if it fails."""
        try:
            func(*args)
        except Exception as e:
            self.failures += 1
            self.logger.warning("Skipping %s after gateway failure: %s: %s", name, type(e).__name__, e)
            self.logger.debug("Gateway failure details for %s", name, exc_info=True)
            return False
        return True


class BestEffortAudio(_BestEffort):
    """Wraps an AudioGateway so that failures are logged and skipped."""

    def __init__(self, inner: AudioGateway, log_level: LOG_LEVELS | None = None) -> None:
        super().__init__(log_level=log_level)
        self.inner = inner

    def play_sound(self, sound: SoundOption, fade_duration: float, stop_background: bool) -> bool:
        self.logger.debug("Playing %s with %ss fade (stop_background=%s)", sound, fade_duration, stop_background)
        return self._call("play_sound", self.inner.play_sound, sound, fade_duration, stop_background)

    def stop_sound(self) -> bool:
        return self._call("stop_sound", self.inner.stop_sound)


class BestEffortNotifications(_BestEffort):
    """Wraps a NotificationGateway so that failures are logged and skipped."""

    def __init__(self, inner: NotificationGateway, log_level: LOG_LEVELS | None = None) -> None:
        super().__init__(log_level=log_level)
        self.inner = inner

    def schedule(self, timer_id: UUID, fire_delay: float, title: str, body: str) -> bool:
        if fire_delay <= 0:
            self.logger.debug("Not scheduling notification for %s, fire delay %s has passed", timer_id, fire_delay)
            return False
        return self._call("schedule", self.inner.schedule, timer_id, fire_delay, title, body)

    def present(self, title: str, body: str) -> bool:
        return self._call("present", self.inner.present, title, body)

    def cancel(self, timer_id: UUID) -> bool:
        return self._call("cancel", self.inner.cancel, timer_id)

    def set_badge(self, count: int) -> bool:
        return self._call("set_badge", self.inner.set_badge, count)

    def clear_badge(self) -> bool:
        return self._call("clear_badge", self.inner.clear_badge)
