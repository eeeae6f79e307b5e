from enum import StrEnum


class TimerPhase(StrEnum):
    """Phase of a started timer."""

    RUNNING = "running"
    PAUSED = "paused"
    ALARM = "alarm"


class AppVisibility(StrEnum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"


class NotificationStrategy(StrEnum):
    """How completion is announced to the user."""

    SCHEDULED = "scheduled"
    """Schedule a notification at start and present one on completion."""

    SILENT = "silent"
    """Never schedule or present notifications, only keep the badge clear."""


class SoundOption(StrEnum):
    """Alarm sounds bundled with the application.

    The enum value is the persisted key; `label`, `file_name` and `file_extension` describe the asset.
    """

    SINGING_BOWL_C = "singingBowlC"
    SINGING_BOWL_MOON = "singingBowlMoon"
    SINGING_BOWL_LONG = "singingBowlLong"
    NATURE_MUSIC = "natureMusic"

    @property
    def label(self) -> str:
        return _SOUND_LABELS[self]

    @property
    def file_name(self) -> str:
        return _SOUND_FILES[self]

    @property
    def file_extension(self) -> str:
        if self is SoundOption.NATURE_MUSIC:
            return "mp3"
        return "wav"

    @property
    def asset_name(self) -> str:
        """File name of the asset including its extension."""
        return f"{self.file_name}.{self.file_extension}"


_SOUND_LABELS = {
    SoundOption.SINGING_BOWL_C: "Singing Bowl (C)",
    SoundOption.SINGING_BOWL_MOON: "Singing Bowl (Moon Note)",
    SoundOption.SINGING_BOWL_LONG: "Singing Bowl (Long)",
    SoundOption.NATURE_MUSIC: "Nature Music",
}

_SOUND_FILES = {
    SoundOption.SINGING_BOWL_C: "204917__brodjaman__singing-bowl-c-tuned",
    SoundOption.SINGING_BOWL_MOON: (
        "239910__the_very_real_horst__79-tibetan-singing-bowl-moon-nodes-and-makemake-with-binaural-beats"
    ),
    SoundOption.SINGING_BOWL_LONG: "573805__hollandm__singing-bowl-long-without-reverb",
    SoundOption.NATURE_MUSIC: "711018__muyo5438__atmosphere-music-for-nature-movies",
}
