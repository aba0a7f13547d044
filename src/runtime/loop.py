"""Runtime orchestration loop for ticks, lock events, and timer commands."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Any, Callable, Optional, TextIO

from app_config import AppConfig
from contracts.ui_protocol import EVENT_ERROR
from notifications import NotificationService
from pomodoro import MonotonicTickSource, PomodoroTimer, TimerConfig
from pomodoro.constants import ACTION_SYNC, REASON_INVALID_VALUE, REASON_STARTUP
from pomodoro.contracts import SoundPlayerLike
from screen_lock import (
    QueueEventPublisher,
    ScreenLockedEvent,
    ScreenLockMonitor,
    ScreenLockProbe,
    ScreenUnlockedEvent,
)

from .commands import (
    COMMAND_BREAK,
    COMMAND_INTERVALS,
    COMMAND_LONG_BREAK,
    COMMAND_PAUSE,
    COMMAND_QUIT,
    COMMAND_RESET,
    COMMAND_START,
    COMMAND_STATUS,
    COMMAND_TOGGLE,
    COMMAND_VOLUME,
    COMMAND_WORK,
    TimerCommandEvent,
)
from .console import ConsoleCommandReader
from .ui import PresenterLike, RuntimeUIPublisher

MAX_WAIT_SECONDS = 0.25


class _StopRequest:
    pass


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    sound_player: Optional[SoundPlayerLike] = None
    notification_service: Optional[NotificationService] = None
    lock_probe: Optional[ScreenLockProbe] = None
    command_stream: Optional[TextIO] = None
    presenters: list[PresenterLike] = field(default_factory=list)
    monotonic_now: Optional[Callable[[], float]] = None


class RuntimeEngine:
    """Single-consumer loop that owns the timer and serializes every mutation.

    Ticks, screen lock events, and presentation commands are all handled on
    the thread that calls `run()`; other threads only enqueue events.
    """
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._stop_requested = threading.Event()

        self._event_queue: Queue[Any] = Queue()
        self._tick_source = MonotonicTickSource(
            monotonic_now=bootstrap.monotonic_now,
            logger=logging.getLogger("ticks"),
        )
        timer_settings = bootstrap.app_config.timer
        self._timer = PomodoroTimer(
            tick_source=self._tick_source,
            config=TimerConfig.from_minutes(
                work_minutes=timer_settings.work_minutes,
                break_minutes=timer_settings.break_minutes,
                long_break_minutes=timer_settings.long_break_minutes,
                intervals_until_long_break=timer_settings.intervals_until_long_break,
                sound_volume=timer_settings.sound_volume,
            ),
            sound_player=bootstrap.sound_player,
            notifier=bootstrap.notification_service,
            logger=logging.getLogger("pomodoro"),
        )
        self._ui = RuntimeUIPublisher(
            bootstrap.presenters,
            logger=logging.getLogger("runtime.ui"),
        )
        self._timer.add_listener(self._ui.handle_update)

        self._lock_monitor: Optional[ScreenLockMonitor] = None
        if bootstrap.lock_probe is not None:
            self._lock_monitor = ScreenLockMonitor(
                bootstrap.lock_probe,
                QueueEventPublisher(self._event_queue),
                poll_interval_seconds=bootstrap.app_config.screen_lock.poll_interval_seconds,
                logger=logging.getLogger("screen_lock"),
            )

        self._command_reader: Optional[ConsoleCommandReader] = None
        if bootstrap.command_stream is not None:
            self._command_reader = ConsoleCommandReader(
                self._event_queue,
                bootstrap.command_stream,
                logger=logging.getLogger("runtime.console"),
            )

    @property
    def timer(self) -> PomodoroTimer:
        return self._timer

    @property
    def tick_source(self) -> MonotonicTickSource:
        return self._tick_source

    def submit(self, event: Any) -> None:
        """Queue an event for the loop thread. Safe to call from any thread."""
        self._event_queue.put(event)

    def request_stop(self) -> None:
        self._stop_requested.set()
        self._event_queue.put(_StopRequest())

    def run(self) -> int:
        try:
            if self._lock_monitor is not None:
                self._logger.info("Starting screen lock monitor...")
                self._lock_monitor.start()
            if self._command_reader is not None:
                self._command_reader.start()

            self._ui.publish_pomodoro_update(
                self._timer.snapshot(),
                action=ACTION_SYNC,
                accepted=True,
                reason=REASON_STARTUP,
            )
            if self._bootstrap.app_config.timer.autostart:
                self._timer.start()

            self._logger.info("Ready! Pomodoro timer is running in the background.")
            while not self._stop_requested.is_set():
                self.run_once()
            return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            self._ui.publish(EVENT_ERROR, message=str(error))
            return 1
        finally:
            self._shutdown()

    def run_once(self, max_wait_seconds: float = MAX_WAIT_SECONDS) -> None:
        """Deliver a due tick, then handle at most one queued event."""
        self._tick_source.poll()

        wait = self._tick_source.seconds_until_due()
        timeout = max_wait_seconds if wait is None else min(max_wait_seconds, wait)
        try:
            event = self._event_queue.get(timeout=max(0.0, timeout))
        except Empty:
            return
        self._handle_event(event)

    def _handle_event(self, event: Any) -> None:
        if isinstance(event, _StopRequest):
            self._stop_requested.set()
            return

        if isinstance(event, ScreenLockedEvent):
            self._logger.info("Screen locked at %s", event.occurred_at.isoformat())
            self._timer.handle_screen_lock()
            return

        if isinstance(event, ScreenUnlockedEvent):
            self._logger.info("Screen unlocked at %s", event.occurred_at.isoformat())
            self._timer.handle_screen_unlock()
            return

        if isinstance(event, TimerCommandEvent):
            self._handle_command(event)
            return

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)

    def _handle_command(self, command: TimerCommandEvent) -> None:
        action = command.action
        if action in (COMMAND_START, COMMAND_PAUSE, COMMAND_RESET):
            result = self._timer.apply(action)
            if not result.accepted:
                self._ui.publish_command_rejected(action, result.reason)
            return

        if action == COMMAND_TOGGLE:
            if self._timer.is_running:
                self._timer.pause()
            else:
                self._timer.start()
            return

        if action == COMMAND_STATUS:
            self._ui.publish_pomodoro_update(self._timer.snapshot(), action=ACTION_SYNC)
            return

        if action == COMMAND_QUIT:
            self.request_stop()
            return

        if command.value is None:
            self._logger.warning("Command '%s' requires a value", action)
            self._ui.publish_command_rejected(action, REASON_INVALID_VALUE)
            return

        try:
            self._apply_value_command(action, command.value)
        except (TypeError, ValueError) as error:
            self._logger.warning(
                "Ignoring command '%s' with value %r: %s",
                action,
                command.value,
                error,
            )
            self._ui.publish_command_rejected(action, REASON_INVALID_VALUE)

    def _apply_value_command(self, action: str, value: float) -> None:
        if action == COMMAND_WORK:
            self._timer.set_work_duration(value * 60)
        elif action == COMMAND_BREAK:
            self._timer.set_break_duration(value * 60)
        elif action == COMMAND_LONG_BREAK:
            self._timer.set_long_break_duration(value * 60)
        elif action == COMMAND_INTERVALS:
            self._timer.set_intervals_until_long_break(value)
        elif action == COMMAND_VOLUME:
            # Accept both 0..1 and percentages.
            self._timer.set_sound_volume(value / 100.0 if value > 1 else value)
        else:
            self._logger.warning("Ignoring unknown command: %s", action)

    def _shutdown(self) -> None:
        if self._command_reader is not None:
            self._command_reader.stop()

        if self._lock_monitor is not None:
            self._logger.info("Stopping screen lock monitor...")
            try:
                self._lock_monitor.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping lock monitor: %s", error, exc_info=True)

        self._logger.info("Stopping pomodoro timer...")
        self._timer.cleanup()
        self._timer.remove_listener(self._ui.handle_update)

        notification_service = self._bootstrap.notification_service
        if notification_service is not None:
            notification_service.shutdown(wait=False)
