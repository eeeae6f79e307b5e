import typing
from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest

from meditimer.engine import TimerEngine
from meditimer.enums import NotificationStrategy
from meditimer.models import TimerTemplate
from meditimer.store import SqliteKeyValueStore, TemplateStore

from .clock import FakeClock
from .gateways import RecordingAudioGateway, RecordingNotificationGateway

if typing.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def audio() -> RecordingAudioGateway:
    return RecordingAudioGateway()


@pytest.fixture
def notifications() -> RecordingNotificationGateway:
    return RecordingNotificationGateway()


@pytest.fixture
def engine_factory(
    clock: FakeClock, audio: RecordingAudioGateway, notifications: RecordingNotificationGateway
) -> Callable[..., TimerEngine]:
    """Build engines wired to the shared fake clock and recording gateways."""

    def _factory(**kwargs: Any) -> TimerEngine:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("notification_strategy", NotificationStrategy.SCHEDULED)
        return TimerEngine(audio, notifications, **kwargs)

    return _factory


@pytest.fixture
def engine(engine_factory: Callable[..., TimerEngine]) -> TimerEngine:
    return engine_factory()


@pytest.fixture
def template_factory() -> Callable[..., TimerTemplate]:
    def _factory(**kwargs: Any) -> TimerTemplate:
        kwargs.setdefault("name", "Morning sit")
        kwargs.setdefault("duration", 600)
        kwargs.setdefault("alarm_fade_in_duration", 15)
        return TimerTemplate(**kwargs)

    return _factory


@pytest.fixture
async def kv_store(tmp_path: "Path") -> AsyncIterator[SqliteKeyValueStore]:
    async with SqliteKeyValueStore(tmp_path / "meditimer.db") as kv:
        yield kv


@pytest.fixture
async def template_store(kv_store: SqliteKeyValueStore) -> TemplateStore:
    store = TemplateStore(kv_store)
    await store.load()
    return store
