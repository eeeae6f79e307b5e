import asyncio
from collections.abc import AsyncIterator, Callable

import pytest

from meditimer.core.ticker import Ticker
from meditimer.engine import TimerEngine
from meditimer.models import TimerTemplate
from meditimer.test_utils import FakeClock


@pytest.fixture
def ticker(engine: TimerEngine) -> Ticker:
    return Ticker(engine, tick_interval=0.5, fade_tick_interval=0.05, idle_tick_interval=10)


@pytest.fixture
async def running_ticker(ticker: Ticker) -> AsyncIterator[Ticker]:
    task = asyncio.create_task(ticker.run_forever())
    await asyncio.wait_for(ticker.ready_event.wait(), timeout=1)
    try:
        yield ticker
    finally:
        ticker.request_shutdown("test finished")
        await asyncio.wait_for(task, timeout=1)


def test_sleep_time_follows_engine_activity(
    ticker: Ticker, engine: TimerEngine, clock: FakeClock, template_factory: Callable[..., TimerTemplate]
) -> None:
    """Idle, counting down and fading each use their own interval."""
    assert ticker.get_sleep_time() == 10

    template = template_factory(duration=5, alarm_fade_in_duration=5)
    engine.start(template)
    assert ticker.get_sleep_time() == 0.5

    clock.advance(5)
    engine.tick()
    assert ticker.get_sleep_time() == 0.05

    clock.advance(5)
    engine.tick()
    assert ticker.get_sleep_time() == 10


async def test_kick_wakes_the_loop(running_ticker: Ticker) -> None:
    await asyncio.sleep(0.02)
    ticks_before = running_ticker.ticks

    running_ticker.kick()
    await asyncio.sleep(0.02)

    assert running_ticker.ticks == ticks_before + 1


async def test_completion_is_detected_by_the_loop(
    running_ticker: Ticker, engine: TimerEngine, clock: FakeClock, template_factory
) -> None:
    template = template_factory(duration=60)
    engine.start(template)

    clock.advance(60)
    running_ticker.kick()
    await asyncio.sleep(0.02)

    assert engine.get_or_raise(template.id).is_alarm_playing


async def test_engine_errors_do_not_stop_the_loop(
    running_ticker: Ticker, engine: TimerEngine, monkeypatch, caplog
) -> None:
    def broken_tick():
        raise RuntimeError("boom")

    monkeypatch.setattr(engine, "tick", broken_tick)

    with caplog.at_level("ERROR"):
        running_ticker.kick()
        await asyncio.sleep(0.02)
        running_ticker.kick()
        await asyncio.sleep(0.02)

    assert "Error ticking timer engine" in caplog.text
    assert running_ticker.is_ready()


async def test_shutdown_stops_the_loop(ticker: Ticker) -> None:
    task = asyncio.create_task(ticker.run_forever())
    await asyncio.wait_for(ticker.ready_event.wait(), timeout=1)

    ticker.request_shutdown("done")
    await asyncio.wait_for(task, timeout=1)

    assert task.done()
    assert not ticker.is_ready()


async def test_shutdown_requested_before_start_exits_immediately(ticker: Ticker) -> None:
    ticker.request_shutdown("never mind")

    await asyncio.wait_for(ticker.run_forever(), timeout=1)

    assert ticker.ticks == 0
