import asyncio
import logging
import sys
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, CliApp, CliSubCommand, SettingsConfigDict

from meditimer.config import MeditimerConfig
from meditimer.core.core import Meditimer
from meditimer.enums import SoundOption
from meditimer.exceptions import MeditimerError
from meditimer.models import TimerRunState, TimerTemplate
from meditimer.utils.time_utils import format_time, parse_duration

LOGGER = logging.getLogger("meditimer.cli")


def _print_state(_: UUID, state: TimerRunState | None) -> None:
    if state is None:
        print()
        return

    if state.is_alarm_playing:
        line = f"{state.template.name}: done, alarm volume {int(state.alarm_volume * 100)}%"
    else:
        line = f"{state.template.name}: {format_time(state.remaining)}{' (paused)' if state.is_paused else ''}"

    print(f"\r{line:<60}", end="", flush=True)


def load_config() -> MeditimerConfig:
    """Build the configuration every command runs with."""
    return MeditimerConfig()


async def list_templates() -> None:
    async with Meditimer(load_config()) as meditimer:
        if not len(meditimer.store):
            print("No timer templates saved.")
            return

        for template in meditimer.store:
            print(
                f"{template.name:<24} {format_time(template.duration):>8}  {template.sound_option.label}"
                f"  (fade in {template.alarm_fade_in_duration:g}s)"
            )


async def add_template(template: TimerTemplate) -> None:
    async with Meditimer(load_config()) as meditimer:
        await meditimer.add_template(template)
        print(f"Saved {template.name} ({format_time(template.duration)})")


async def delete_template(name: str) -> None:
    async with Meditimer(load_config()) as meditimer:
        template = meditimer.store.find_by_name(name)
        await meditimer.delete_template(template.id)
        print(f"Deleted {template.name}")


async def run_template(name: str) -> None:
    async with Meditimer(load_config()) as meditimer:
        template = meditimer.store.find_by_name(name)
        meditimer.engine.add_listener(_print_state)
        meditimer.start_timer(template.id)
        await meditimer.wait_for_alarm(template.id, full_volume=True)
        print()


class TemplatesCommand(BaseModel):
    """List the saved timer templates."""

    def cli_cmd(self) -> None:
        asyncio.run(list_templates())


class AddCommand(BaseModel):
    """Save a new timer template."""

    name: str
    """Name of the template."""

    duration: str
    """Duration as seconds, MM:SS or HH:MM:SS."""

    sound: SoundOption = SoundOption.SINGING_BOWL_C
    """Alarm sound."""

    fade_in: float = Field(default=15, ge=0)
    """Seconds for the alarm to reach full volume."""

    stop_background_music: bool = False
    """Stop other audio when the alarm starts."""

    def cli_cmd(self) -> None:
        template = TimerTemplate(
            name=self.name,
            duration=parse_duration(self.duration),
            sound_option=self.sound,
            alarm_fade_in_duration=self.fade_in,
            stop_background_music=self.stop_background_music,
        )
        asyncio.run(add_template(template))


class DeleteCommand(BaseModel):
    """Delete a saved timer template."""

    name: str
    """Name of the template."""

    def cli_cmd(self) -> None:
        asyncio.run(delete_template(self.name))


class RunCommand(BaseModel):
    """Run a saved template with a live countdown until its alarm reaches full volume."""

    name: str
    """Name of the template."""

    def cli_cmd(self) -> None:
        try:
            asyncio.run(run_template(self.name))
        except KeyboardInterrupt:
            print("\nStopped.")


class MeditimerCli(BaseSettings):
    """Meditation timer."""

    model_config = SettingsConfigDict(cli_prog_name="meditimer", cli_kebab_case=True, cli_implicit_flags=True)

    templates: CliSubCommand[TemplatesCommand]
    add: CliSubCommand[AddCommand]
    delete: CliSubCommand[DeleteCommand]
    run: CliSubCommand[RunCommand]

    def cli_cmd(self) -> None:
        CliApp.run_subcommand(self)


def main() -> int:
    try:
        CliApp.run(MeditimerCli)
    except MeditimerError as e:
        LOGGER.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
