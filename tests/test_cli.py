import asyncio
import sys

import pytest
from pydantic_settings import CliApp

from meditimer import Meditimer, MeditimerConfig, TimerTemplate
from meditimer import __main__ as cli
from meditimer.enums import SoundOption


@pytest.fixture(autouse=True)
def cli_config(test_config: MeditimerConfig, monkeypatch) -> MeditimerConfig:
    """Point every CLI command at the temporary test configuration."""
    monkeypatch.setattr(cli, "load_config", lambda: test_config)
    return test_config


def stored_templates(config: MeditimerConfig) -> list[TimerTemplate]:
    async def _load() -> list[TimerTemplate]:
        async with Meditimer(config) as meditimer:
            return meditimer.store.templates

    return asyncio.run(_load())


def test_add_saves_template(cli_config: MeditimerConfig, capsys) -> None:
    CliApp.run(
        cli.MeditimerCli,
        cli_args=[
            "add",
            "--name",
            "Evening",
            "--duration",
            "25:00",
            "--sound",
            "natureMusic",
            "--fade-in",
            "5",
            "--stop-background-music",
        ],
    )

    (template,) = stored_templates(cli_config)
    assert template.name == "Evening"
    assert template.duration == 1500
    assert template.sound_option is SoundOption.NATURE_MUSIC
    assert template.alarm_fade_in_duration == 5
    assert template.stop_background_music is True
    assert "Saved Evening (25:00)" in capsys.readouterr().out


def test_templates_lists_saved_templates(capsys) -> None:
    CliApp.run(cli.MeditimerCli, cli_args=["templates"])
    assert "No timer templates saved." in capsys.readouterr().out

    CliApp.run(cli.MeditimerCli, cli_args=["add", "--name", "Morning", "--duration", "600"])
    capsys.readouterr()

    CliApp.run(cli.MeditimerCli, cli_args=["templates"])
    out = capsys.readouterr().out
    assert "Morning" in out
    assert "10:00" in out
    assert SoundOption.SINGING_BOWL_C.label in out


def test_delete_removes_template(cli_config: MeditimerConfig, capsys) -> None:
    CliApp.run(cli.MeditimerCli, cli_args=["add", "--name", "Morning", "--duration", "600"])

    CliApp.run(cli.MeditimerCli, cli_args=["delete", "--name", "morning"])

    assert "Deleted Morning" in capsys.readouterr().out
    assert stored_templates(cli_config) == []


def test_run_counts_down_to_full_volume(capsys) -> None:
    CliApp.run(cli.MeditimerCli, cli_args=["add", "--name", "Quick", "--duration", "0.05", "--fade-in", "0.05"])
    capsys.readouterr()

    CliApp.run(cli.MeditimerCli, cli_args=["run", "--name", "quick"])

    assert "Quick: done, alarm volume 100%" in capsys.readouterr().out


def test_main_reports_unknown_template(monkeypatch, caplog) -> None:
    monkeypatch.setattr(sys, "argv", ["meditimer", "delete", "--name", "missing"])

    with caplog.at_level("ERROR"):
        assert cli.main() == 1

    assert "No timer template found for 'missing'" in caplog.text


def test_main_rejects_invalid_duration(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["meditimer", "add", "--name", "Bad", "--duration", "10:75"])

    with pytest.raises(ValueError, match="below 60"):
        cli.main()
