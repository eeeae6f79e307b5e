import asyncio
import typing

from meditimer.logging_ import LOG_LEVELS

from .base import MeditimerBase

if typing.TYPE_CHECKING:
    from uuid import UUID

    from meditimer.engine import TimerEngine


class Ticker(MeditimerBase):
    """Drives periodic recomputation of a TimerEngine on the running event loop.

    The interval depends on what the engine is doing: fast while an alarm is ramping up, normal while a
    countdown is running, and slow when idle. `kick()` wakes the loop early, e.g. after a timer was started.
    """

    ready_event: asyncio.Event
    """Set once the loop is running."""

    shutdown_event: asyncio.Event
    """Set to ask the loop to exit."""

    ticks: int
    """Number of ticks performed since start."""

    def __init__(
        self,
        engine: "TimerEngine",
        *,
        tick_interval: float = 1.0,
        fade_tick_interval: float = 0.05,
        idle_tick_interval: float = 5.0,
        log_level: LOG_LEVELS | None = None,
    ) -> None:
        super().__init__(log_level=log_level)
        self.engine = engine
        self.tick_interval = tick_interval
        self.fade_tick_interval = fade_tick_interval
        self.idle_tick_interval = idle_tick_interval

        self.ready_event = asyncio.Event()
        self.shutdown_event = asyncio.Event()
        self._wakeup_event = asyncio.Event()
        self.ticks = 0

    def is_ready(self) -> bool:
        return self.ready_event.is_set()

    def request_shutdown(self, reason: str | None = None) -> None:
        """Set the sticky shutdown flag. Idempotent."""
        if not self.shutdown_event.is_set():
            self.logger.debug("Shutdown requested for %s (%s)", self.unique_name, reason or "")
            self.shutdown_event.set()
        self.ready_event.clear()
        self.kick()

    def kick(self) -> None:
        """Wake the ticker up to recompute immediately."""
        self._wakeup_event.set()

    async def run_forever(self) -> None:
        """Tick the engine until shutdown is requested."""
        self.ready_event.set()
        self.logger.debug("Ticker started")

        try:
            while not self.shutdown_event.is_set():
                self.tick()
                await self.sleep()
        except asyncio.CancelledError:
            self.logger.debug("Ticker cancelled, stopping")
            raise
        finally:
            self.ready_event.clear()
            self.logger.debug("Ticker stopped after %d ticks", self.ticks)

    def tick(self) -> list["UUID"]:
        """Recompute once. Errors are logged and the loop carries on with the next tick."""
        self.ticks += 1
        try:
            completed = self.engine.tick()
        except Exception:
            self.logger.exception("Error ticking timer engine")
            return []

        if completed:
            self.logger.debug("Timers completed on tick %d: %s", self.ticks, completed)
        return completed

    async def sleep(self) -> None:
        """Sleep until the next tick is due or a kick is received."""
        try:
            await asyncio.wait_for(self._wakeup_event.wait(), timeout=self.get_sleep_time())
        except TimeoutError:
            pass
        finally:
            self._wakeup_event.clear()

    def get_sleep_time(self) -> float:
        """Seconds until the next tick, based on what the engine is doing."""
        if self.engine.has_fading_alarm:
            return self.fade_tick_interval
        if self.engine.has_running_timer:
            return self.tick_interval
        return self.idle_tick_interval
