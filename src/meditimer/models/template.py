from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from meditimer.enums import SoundOption


class TimerTemplate(BaseModel):
    """A user-defined, reusable timer configuration.

    Templates are immutable; edits produce a new instance with the same `id` via `replace`, which the
    store then swaps into its collection.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="ignore",
    )

    id: UUID = Field(default_factory=uuid4)
    """Unique identity of the template."""

    name: str = ""
    """Display name."""

    duration: float = Field(default=0, ge=0)
    """Countdown length in seconds."""

    sound_option: SoundOption = SoundOption.SINGING_BOWL_C
    """Alarm sound played on completion."""

    background_music_fade: bool = True
    """Whether other audio should be faded down while the alarm plays."""

    stop_background_music: bool = False
    """Whether other audio should be stopped entirely when the alarm starts."""

    fade_interval: float = Field(default=30, ge=0)
    """Seconds over which background music is faded."""

    alarm_fade_in_duration: float = Field(default=15, ge=0)
    """Seconds over which the alarm volume ramps from silent to full."""

    def replace(self, **changes: Any) -> "TimerTemplate":
        """Return a validated copy with `changes` applied. The id cannot be changed.

        Raises:
            ValueError: If `id` is passed.
        """
        if "id" in changes:
            raise ValueError("The id of a timer template cannot be changed")

        data = self.model_dump()
        data.update(changes)
        return TimerTemplate.model_validate(data)

    def __str__(self) -> str:
        return f"{self.name or '<unnamed>'} ({self.id})"


TemplateList = TypeAdapter(list[TimerTemplate])
"""Adapter used to (de)serialize the persisted template collection."""
