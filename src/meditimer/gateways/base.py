from typing import Protocol, runtime_checkable
from uuid import UUID

from meditimer.enums import SoundOption


@runtime_checkable
class AudioGateway(Protocol):
    """Plays the alarm sound on the device-wide audio channel."""

    def play_sound(self, sound: SoundOption, fade_duration: float, stop_background: bool) -> None:
        """Start looping `sound`, ramping it from silent to full volume over `fade_duration` seconds.

        Any sound already playing is stopped first. When `stop_background` is True other audio is stopped,
        otherwise it is allowed to keep playing (ducked).
        """
        ...

    def stop_sound(self) -> None:
        """Stop the alarm sound if one is playing."""
        ...


@runtime_checkable
class NotificationGateway(Protocol):
    """Delivers user-visible alerts on the single notification channel."""

    def schedule(self, timer_id: UUID, fire_delay: float, title: str, body: str) -> None:
        """Schedule a notification for `timer_id` to fire in `fire_delay` seconds."""
        ...

    def present(self, title: str, body: str) -> None:
        """Show a notification immediately."""
        ...

    def cancel(self, timer_id: UUID) -> None:
        """Cancel the pending notification for `timer_id`, if any."""
        ...

    def set_badge(self, count: int) -> None: ...

    def clear_badge(self) -> None: ...


def notification_identifier(timer_id: UUID) -> str:
    """Identifier of the scheduled notification belonging to a timer."""
    return f"timer-{timer_id}"
