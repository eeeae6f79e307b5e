from collections.abc import Callable, Mapping
from types import MappingProxyType
from uuid import UUID

from whenever import Instant

from meditimer.core.base import MeditimerBase
from meditimer.enums import AppVisibility, NotificationStrategy, TimerPhase
from meditimer.exceptions import TimerNotActiveError
from meditimer.gateways import AudioGateway, BestEffortAudio, BestEffortNotifications, NotificationGateway
from meditimer.logging_ import LOG_LEVELS
from meditimer.models import TimerRunState, TimerTemplate

from .fade import AlarmFade
from .reconcile import progress, recompute, resume_anchor

StateListener = Callable[[UUID, "TimerRunState | None"], None]
"""Called with the timer id and a copy of its new state, or None once the timer was stopped."""


class TimerEngine(MeditimerBase):
    """Countdown state machine for zero or more started templates.

    Remaining time is recomputed from each run's absolute start instant on every `tick` and on every
    foreground transition. All mutation happens on the caller's thread, normally the asyncio loop that
    drives the ticker.
    """

    _states: dict[UUID, TimerRunState]
    """Run states keyed by template id."""

    _listeners: list[StateListener]

    visibility: AppVisibility
    """Whether the host application is currently in the foreground."""

    def __init__(
        self,
        audio: AudioGateway,
        notifications: NotificationGateway,
        *,
        clock: Callable[[], Instant] = Instant.now,
        exclusive: bool = True,
        notification_strategy: NotificationStrategy = NotificationStrategy.SCHEDULED,
        notification_title: str = "Meditation Complete",
        notification_body: str = "Your {name} meditation is complete!",
        log_level: LOG_LEVELS | None = None,
    ) -> None:
        super().__init__(log_level=log_level)

        self.audio = audio if isinstance(audio, BestEffortAudio) else BestEffortAudio(audio, log_level)
        self.notifications = (
            notifications
            if isinstance(notifications, BestEffortNotifications)
            else BestEffortNotifications(notifications, log_level)
        )
        self.clock = clock
        self.exclusive = exclusive
        self.notification_strategy = notification_strategy
        self.notification_title = notification_title
        self.notification_body = notification_body

        self.visibility = AppVisibility.FOREGROUND
        self._states = {}
        self._listeners = []

    # --------- queries

    @property
    def states(self) -> Mapping[UUID, TimerRunState]:
        """Read-only view of the current run states."""
        return MappingProxyType(self._states)

    @property
    def is_backgrounded(self) -> bool:
        return self.visibility == AppVisibility.BACKGROUND

    @property
    def has_running_timer(self) -> bool:
        return any(state.is_running for state in self._states.values())

    @property
    def has_fading_alarm(self) -> bool:
        return any(state.is_fading for state in self._states.values())

    @property
    def ringing_count(self) -> int:
        """Number of alarms currently ringing, which is what the badge shows."""
        return sum(1 for state in self._states.values() if state.is_alarm_playing)

    def get(self, template_id: UUID) -> TimerRunState | None:
        return self._states.get(template_id)

    def get_or_raise(self, template_id: UUID) -> TimerRunState:
        """Return the run state of `template_id`.

        Raises:
            TimerNotActiveError: If the timer has not been started or was stopped.
        """
        try:
            return self._states[template_id]
        except KeyError:
            raise TimerNotActiveError(template_id) from None

    def is_active(self, template_id: UUID) -> bool:
        return template_id in self._states

    # --------- listeners

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, template_id: UUID) -> None:
        state = self._states.get(template_id)
        snapshot = state.copy() if state else None
        for listener in list(self._listeners):
            try:
                listener(template_id, snapshot)
            except Exception:
                self.logger.exception("Error in state listener %r for timer %s", listener, template_id)

    # --------- lifecycle ops

    def start(self, template: TimerTemplate) -> TimerRunState:
        """Start a countdown for `template`, replacing any previous run of the same template.

        In exclusive mode every other run is stopped first, since there is a single audio channel.
        """
        self.stop(template.id)

        if self.exclusive:
            for other_id in list(self._states):
                self.logger.debug("Stopping timer %s to start %s", other_id, template.id)
                self.stop(other_id)

        now = self.clock()
        state = TimerRunState(
            template=template,
            start=now,
            total_duration=template.duration,
            remaining=template.duration,
        )
        self._states[template.id] = state
        self.logger.info("Started timer %s for %ss", template, template.duration)

        if template.duration <= 0:
            self._complete(state, now)
            return state

        if self.notification_strategy == NotificationStrategy.SCHEDULED:
            self._schedule_notification(state, template.duration)

        self._publish(template.id)
        return state

    def pause(self, template_id: UUID) -> TimerRunState:
        """Freeze the countdown of `template_id`.

        Pausing a timer that is not running returns its state unchanged. If the countdown turns out to have
        completed already, it completes instead of pausing.

        Raises:
            TimerNotActiveError: If the timer is not active.
        """
        state = self.get_or_raise(template_id)
        if not state.is_running:
            self.logger.debug("Timer %s is %s, not pausing", template_id, state.phase)
            return state

        now = self.clock()
        if self._recompute(state, now):
            self._complete(state, now)
            return state

        state.phase = TimerPhase.PAUSED
        if self.notification_strategy == NotificationStrategy.SCHEDULED:
            self.notifications.cancel(template_id)

        self.logger.info("Paused timer %s with %.1fs remaining", state.template, state.remaining)
        self._publish(template_id)
        return state

    def resume(self, template_id: UUID) -> TimerRunState:
        """Resume a paused countdown with the remaining time it had when it was paused.

        Raises:
            TimerNotActiveError: If the timer is not active.
        """
        state = self.get_or_raise(template_id)
        if not state.is_paused:
            self.logger.debug("Timer %s is %s, not resuming", template_id, state.phase)
            return state

        now = self.clock()
        state.start = resume_anchor(now, state.total_duration, state.remaining)
        state.phase = TimerPhase.RUNNING

        if self.notification_strategy == NotificationStrategy.SCHEDULED:
            self._schedule_notification(state, state.remaining)

        self.logger.info("Resumed timer %s with %.1fs remaining", state.template, state.remaining)
        self._publish(template_id)
        return state

    def stop(self, template_id: UUID) -> bool:
        """Stop the timer or ringing alarm of `template_id` and destroy its run state.

        Returns:
            True if a timer was stopped, False if it was not active.
        """
        state = self._states.pop(template_id, None)
        if state is None:
            return False

        self.audio.stop_sound()
        self.notifications.cancel(template_id)

        ringing = self.ringing_count
        if not ringing:
            self.notifications.clear_badge()
        elif self.notification_strategy == NotificationStrategy.SCHEDULED:
            self.notifications.set_badge(ringing)

        self.logger.info("Stopped timer %s", state.template)
        self._publish(template_id)
        return True

    def stop_all(self) -> int:
        """Stop every active timer, returning how many were stopped."""
        return sum(self.stop(template_id) for template_id in list(self._states))

    # --------- recompute

    def tick(self) -> list[UUID]:
        """Recompute every run state from the current time.

        Ticks are ignored while the application is in the background.

        Returns:
            Ids of the timers that completed during this tick.
        """
        if self.is_backgrounded:
            return []
        return self._reconcile(self.clock())

    def enter_background(self) -> None:
        """Record that the host application was suspended. Wall-clock time keeps passing."""
        if self.is_backgrounded:
            return
        self.visibility = AppVisibility.BACKGROUND
        self.logger.debug("Entered background with %d active timers", len(self._states))

    def enter_foreground(self) -> list[UUID]:
        """Reconcile every run state after the host application resumes.

        Timers whose countdown ran out while suspended complete immediately.

        Returns:
            Ids of the timers that completed.
        """
        self.visibility = AppVisibility.FOREGROUND
        completed = self._reconcile(self.clock())
        self.logger.debug("Entered foreground, %d timers completed while suspended", len(completed))
        return completed

    def _reconcile(self, now: Instant) -> list[UUID]:
        completed: list[UUID] = []

        for template_id, state in list(self._states.items()):
            # a listener may have stopped or restarted this run earlier in the loop
            if self._states.get(template_id) is not state:
                continue

            if state.is_running:
                if self._recompute(state, now):
                    self._complete(state, now)
                    completed.append(template_id)
                else:
                    self._publish(template_id)
            elif state.is_alarm_playing and state.fade is not None and state.fade_remaining > 0:
                self._advance_fade(state, now)
                self._publish(template_id)

        return completed

    def _recompute(self, state: TimerRunState, now: Instant) -> bool:
        """Update remaining time and progress, returning True if the countdown ran out."""
        state.remaining = recompute(now, state.start, state.total_duration)
        state.progress = progress(state.remaining, state.total_duration)
        return state.remaining <= 0

    # --------- completion

    def _complete(self, state: TimerRunState, now: Instant) -> None:
        template = state.template

        state.phase = TimerPhase.ALARM
        state.remaining = 0.0
        state.progress = 1.0
        state.fade = AlarmFade(start=now, duration=template.alarm_fade_in_duration)
        self._advance_fade(state, now)

        self.logger.info("Timer %s completed", template)

        self.audio.play_sound(template.sound_option, template.alarm_fade_in_duration, template.stop_background_music)

        if self.notification_strategy == NotificationStrategy.SCHEDULED:
            self.notifications.present(self.notification_title, self._notification_body(template))
            self.notifications.set_badge(self.ringing_count)

        self._publish(template.id)

    def _advance_fade(self, state: TimerRunState, now: Instant) -> None:
        assert state.fade is not None, "Alarm fade must be set before advancing it"
        state.alarm_volume = state.fade.volume_at(now)
        state.fade_remaining = state.fade.remaining_at(now)
        if state.fade.is_complete(now):
            self.logger.debug("Alarm for %s reached full volume", state.template)

    # --------- notifications

    def _notification_body(self, template: TimerTemplate) -> str:
        return self.notification_body.format(name=template.name)

    def _schedule_notification(self, state: TimerRunState, fire_delay: float) -> None:
        template = state.template
        self.notifications.schedule(template.id, fire_delay, self.notification_title, self._notification_body(template))
