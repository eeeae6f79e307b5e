import asyncio
import contextlib
from collections.abc import Callable
from uuid import UUID

from whenever import Instant

from meditimer.config import MeditimerConfig
from meditimer.engine import TimerEngine
from meditimer.gateways import AudioGateway, LoggingAudioGateway, LoggingNotificationGateway, NotificationGateway
from meditimer.models import TimerRunState, TimerTemplate
from meditimer.store import KeyValueStore, SqliteKeyValueStore, TemplateStore

from .base import MeditimerBase
from .ticker import Ticker


class Meditimer(MeditimerBase):
    """Main class for meditimer.

    Wires the template store, the timer engine, the gateways and the ticker together. Every collaborator can
    be passed in explicitly; anything left out is built from the configuration.
    """

    store: TemplateStore
    """Persisted timer templates."""

    engine: TimerEngine
    """Countdown state machine."""

    ticker: Ticker
    """Periodic driver of the engine."""

    def __init__(
        self,
        config: MeditimerConfig,
        *,
        audio: AudioGateway | None = None,
        notifications: NotificationGateway | None = None,
        kv: KeyValueStore | None = None,
        clock: Callable[[], Instant] = Instant.now,
    ) -> None:
        super().__init__(unique_name_prefix="meditimer", log_level=config.log_level)
        self.config = config

        self._owns_kv = kv is None
        self.kv = kv or SqliteKeyValueStore(config.store_path, log_level=config.store_log_level)
        self.store = TemplateStore(self.kv, key=config.templates_key, log_level=config.store_log_level)

        audio = audio or LoggingAudioGateway(config.sounds_dir, log_level=config.gateway_log_level)
        notifications = notifications or LoggingNotificationGateway(log_level=config.gateway_log_level)

        self.engine = TimerEngine(
            audio,
            notifications,
            clock=clock,
            exclusive=config.exclusive_timers,
            notification_strategy=config.notification_strategy,
            notification_title=config.notification_title,
            notification_body=config.notification_body,
            log_level=config.engine_log_level,
        )
        self.ticker = Ticker(
            self.engine,
            tick_interval=config.tick_interval_seconds,
            fade_tick_interval=config.fade_tick_interval_seconds,
            idle_tick_interval=config.idle_tick_interval_seconds,
            log_level=config.ticker_log_level,
        )

        self._ticker_task: asyncio.Task | None = None

    # --------- lifecycle

    async def start(self) -> None:
        """Open the store, load templates and start ticking."""
        if self._ticker_task and not self._ticker_task.done():
            self.logger.warning("meditimer is already running", stacklevel=2)
            return

        if isinstance(self.kv, SqliteKeyValueStore):
            await self.kv.open()

        await self.store.load()

        # a previous shutdown leaves the flag set
        self.ticker.shutdown_event.clear()
        self._ticker_task = asyncio.create_task(self.ticker.run_forever(), name="meditimer:ticker")
        await asyncio.wait_for(self.ticker.ready_event.wait(), timeout=self.config.ticker_shutdown_timeout_seconds)
        self.logger.info("meditimer started with %d templates", len(self.store))

    async def shutdown(self) -> None:
        """Stop every timer, stop ticking and close the store."""
        self.engine.stop_all()

        task, self._ticker_task = self._ticker_task, None
        if task is not None:
            self.ticker.request_shutdown("meditimer shutting down")
            try:
                await asyncio.wait_for(task, timeout=self.config.ticker_shutdown_timeout_seconds)
            except TimeoutError:
                self.logger.warning("Ticker did not exit in time, cancelling")
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

        if self._owns_kv and isinstance(self.kv, SqliteKeyValueStore):
            await self.kv.close()

        self.logger.info("meditimer stopped")

    async def __aenter__(self) -> "Meditimer":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.shutdown()

    # --------- templates

    async def add_template(self, template: TimerTemplate) -> TimerTemplate:
        return await self.store.add(template)

    async def update_template(self, template: TimerTemplate) -> TimerTemplate:
        """Replace a stored template. A timer already started from it keeps the old snapshot until restarted."""
        return await self.store.replace(template)

    async def delete_template(self, template_id: UUID) -> TimerTemplate:
        """Delete a template, stopping its timer first if it is active."""
        self.engine.stop(template_id)
        return await self.store.delete(template_id)

    # --------- timers

    def start_timer(self, template_id: UUID) -> TimerRunState:
        """Start the stored template with `template_id`.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        state = self.engine.start(self.store.get(template_id))
        self.ticker.kick()
        return state

    def pause_timer(self, template_id: UUID) -> TimerRunState:
        return self.engine.pause(template_id)

    def resume_timer(self, template_id: UUID) -> TimerRunState:
        state = self.engine.resume(template_id)
        self.ticker.kick()
        return state

    def stop_timer(self, template_id: UUID) -> bool:
        return self.engine.stop(template_id)

    def enter_background(self) -> None:
        self.engine.enter_background()

    def enter_foreground(self) -> list[UUID]:
        completed = self.engine.enter_foreground()
        self.ticker.kick()
        return completed

    async def wait_for_alarm(self, template_id: UUID, *, full_volume: bool = False) -> TimerRunState | None:
        """Wait until the timer of `template_id` starts ringing, or reaches full volume if `full_volume`.

        Returns:
            The state at that moment, or None if the timer was stopped first.
        """
        done = asyncio.Event()
        result: list[TimerRunState | None] = []

        def reached(state: TimerRunState | None) -> bool:
            if state is None:
                return True
            if not state.is_alarm_playing:
                return False
            return not full_volume or state.alarm_volume >= 1.0

        def listener(changed_id: UUID, state: TimerRunState | None) -> None:
            if changed_id == template_id and not done.is_set() and reached(state):
                result.append(state)
                done.set()

        current = self.engine.get(template_id)
        if reached(current):
            return current.copy() if current else None

        self.engine.add_listener(listener)
        try:
            await done.wait()
        finally:
            self.engine.remove_listener(listener)

        return result[0]
