from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from meditimer.enums import SoundOption


@dataclass
class RecordingAudioGateway:
    """Audio gateway that records every call. Set `fail` to make every call raise."""

    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    fail: Exception | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail is not None:
            raise self.fail

    def play_sound(self, sound: SoundOption, fade_duration: float, stop_background: bool) -> None:
        self._record("play_sound", sound, fade_duration, stop_background)

    def stop_sound(self) -> None:
        self._record("stop_sound")

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)


@dataclass
class RecordingNotificationGateway:
    """Notification gateway that records every call. Set `fail` to make every call raise."""

    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    scheduled: dict[UUID, float] = field(default_factory=dict)
    badge: int = 0
    fail: Exception | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail is not None:
            raise self.fail

    def schedule(self, timer_id: UUID, fire_delay: float, title: str, body: str) -> None:
        self._record("schedule", timer_id, fire_delay, title, body)
        self.scheduled[timer_id] = fire_delay

    def present(self, title: str, body: str) -> None:
        self._record("present", title, body)

    def cancel(self, timer_id: UUID) -> None:
        self._record("cancel", timer_id)
        self.scheduled.pop(timer_id, None)

    def set_badge(self, count: int) -> None:
        self._record("set_badge", count)
        self.badge = count

    def clear_badge(self) -> None:
        self._record("clear_badge")
        self.badge = 0

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)
