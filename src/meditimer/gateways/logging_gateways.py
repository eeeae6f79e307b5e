from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from meditimer.core.base import MeditimerBase
from meditimer.enums import SoundOption
from meditimer.exceptions import SoundAssetNotFoundError
from meditimer.logging_ import LOG_LEVELS

from .base import notification_identifier


class LoggingAudioGateway(MeditimerBase):
    """Audio gateway for headless use: resolves the sound asset and logs playback instead of producing sound."""

    current_sound: SoundOption | None
    """Sound that is currently 'playing', if any."""

    def __init__(self, sounds_dir: Path, log_level: LOG_LEVELS | None = None) -> None:
        super().__init__(log_level=log_level)
        self.sounds_dir = sounds_dir
        self.current_sound = None

    def resolve_asset(self, sound: SoundOption) -> Path:
        """Return the path of the asset for `sound`.

        Raises:
            SoundAssetNotFoundError: If the file does not exist.
        """
        path = self.sounds_dir / sound.asset_name
        if not path.is_file():
            raise SoundAssetNotFoundError(path)
        return path

    def play_sound(self, sound: SoundOption, fade_duration: float, stop_background: bool) -> None:
        self.stop_sound()
        path = self.resolve_asset(sound)
        self.current_sound = sound
        self.logger.info(
            "Playing '%s' from %s, fading in over %ss%s",
            sound.label,
            path,
            fade_duration,
            " (background audio stopped)" if stop_background else "",
        )

    def stop_sound(self) -> None:
        if self.current_sound is None:
            return
        self.logger.info("Stopping '%s'", self.current_sound.label)
        self.current_sound = None


@dataclass
class PendingNotification:
    identifier: str
    fire_delay: float
    title: str
    body: str


class LoggingNotificationGateway(MeditimerBase):
    """Notification gateway for headless use: keeps pending notifications in memory and logs deliveries."""

    def __init__(self, log_level: LOG_LEVELS | None = None) -> None:
        super().__init__(log_level=log_level)
        self.pending: dict[str, PendingNotification] = {}
        self.badge = 0

    def schedule(self, timer_id: UUID, fire_delay: float, title: str, body: str) -> None:
        identifier = notification_identifier(timer_id)
        self.pending[identifier] = PendingNotification(identifier, fire_delay, title, body)
        self.logger.info("Scheduled notification %s in %.1fs: %s", identifier, fire_delay, title)

    def present(self, title: str, body: str) -> None:
        self.logger.info("%s: %s", title, body)

    def cancel(self, timer_id: UUID) -> None:
        identifier = notification_identifier(timer_id)
        if self.pending.pop(identifier, None) is not None:
            self.logger.debug("Cancelled notification %s", identifier)

    def set_badge(self, count: int) -> None:
        self.badge = count

    def clear_badge(self) -> None:
        self.set_badge(0)
