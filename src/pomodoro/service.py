"""Thread-safe in-memory pomodoro session state machine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Literal, Optional

from .config import TimerConfig
from .constants import (
    ACTION_CONFIGURE,
    ACTION_LOCK,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_START,
    ACTION_TICK,
    ACTION_TRANSITION,
    ACTION_UNLOCK,
    BREAK_PHASES,
    PHASE_BREAK,
    PHASE_LONG_BREAK,
    PHASE_WORK,
    REASON_ALREADY_RUNNING,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_STARTED,
    REASON_UNSUPPORTED_ACTION,
    SOUND_BREAK,
    SOUND_WORK,
)
from .contracts import NotifierLike, SoundPlayerLike
from .messages import transition_notification_text
from .ticks import TickSource, TickSubscription

PomodoroPhase = Literal["work", "break", "long_break"]
PomodoroAction = Literal["start", "pause", "reset"]


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Immutable session snapshot exposed to presentation publishers."""
    phase: PomodoroPhase
    time_remaining: int
    is_running: bool
    completed_intervals: int
    config: TimerConfig

    @property
    def is_work(self) -> bool:
        return self.phase == PHASE_WORK

    @property
    def phase_duration(self) -> int:
        return _phase_duration(self.config, self.phase)


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying a timer command."""
    action: str
    accepted: bool
    reason: str
    snapshot: PomodoroSnapshot


@dataclass(frozen=True)
class PhaseTransition:
    """Committed phase change produced by a tick."""
    previous_phase: PomodoroPhase
    phase: PomodoroPhase
    duration_seconds: int
    completed_intervals: int

    @property
    def sound_name(self) -> str:
        return SOUND_BREAK if self.phase in BREAK_PHASES else SOUND_WORK


@dataclass(frozen=True)
class PomodoroUpdate:
    """Change notification delivered to listeners after each mutation."""
    action: str
    snapshot: PomodoroSnapshot
    transition: Optional[PhaseTransition] = None


PomodoroListener = Callable[[PomodoroUpdate], None]


class PomodoroTimer:
    """Work/break state machine advanced by one-second ticks.

    The timer owns at most one tick subscription. Every mutation happens under
    an internal lock; notifications, sounds and listener callbacks are
    dispatched after the lock is released and the new state is committed.
    """

    def __init__(
        self,
        *,
        tick_source: TickSource,
        config: Optional[TimerConfig] = None,
        sound_player: Optional[SoundPlayerLike] = None,
        notifier: Optional[NotifierLike] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._tick_source = tick_source
        self._config = (config or TimerConfig()).clamped()
        self._sound_player = sound_player
        self._notifier = notifier
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()
        self._listeners: list[PomodoroListener] = []

        self._phase: PomodoroPhase = PHASE_WORK
        self._time_remaining = self._config.work_duration
        self._running = False
        self._completed_intervals = 0
        self._was_running_before_lock = False

        self._subscription: Optional[TickSubscription] = None
        self._generation = 0

        self._forward_volume(self._config.sound_volume)

    @property
    def config(self) -> TimerConfig:
        with self._lock:
            return self._config

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def snapshot(self) -> PomodoroSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def add_listener(self, listener: PomodoroListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: PomodoroListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # Commands

    def apply(self, action: str) -> PomodoroActionResult:
        if action == ACTION_START:
            return self.start()
        if action == ACTION_PAUSE:
            return self.pause()
        if action == ACTION_RESET:
            return self.reset()
        return PomodoroActionResult(
            action=action,
            accepted=False,
            reason=REASON_UNSUPPORTED_ACTION,
            snapshot=self.snapshot(),
        )

    def start(self) -> PomodoroActionResult:
        with self._lock:
            if not self._start_locked():
                return self._result_locked(ACTION_START, False, REASON_ALREADY_RUNNING)
            result = self._result_locked(ACTION_START, True, REASON_STARTED)
        self._publish(PomodoroUpdate(ACTION_START, result.snapshot))
        return result

    def pause(self) -> PomodoroActionResult:
        with self._lock:
            if not self._pause_locked():
                return self._result_locked(ACTION_PAUSE, False, REASON_NOT_RUNNING)
            result = self._result_locked(ACTION_PAUSE, True, REASON_PAUSED)
        self._publish(PomodoroUpdate(ACTION_PAUSE, result.snapshot))
        return result

    def reset(self) -> PomodoroActionResult:
        with self._lock:
            self._pause_locked()
            self._phase = PHASE_WORK
            self._completed_intervals = 0
            self._time_remaining = self._config.work_duration
            self._logger.info(
                "Pomodoro reset: remaining=%ss",
                self._time_remaining,
            )
            result = self._result_locked(ACTION_RESET, True, REASON_RESET)
        self._publish(PomodoroUpdate(ACTION_RESET, result.snapshot))
        return result

    def on_tick(self) -> Optional[PhaseTransition]:
        """Advance the countdown by one second.

        Ticks delivered while paused are ignored. Returns the committed
        transition when this tick ended the current phase.
        """
        return self._tick(generation=None)

    # Screen lock policy

    def handle_screen_lock(self) -> bool:
        with self._lock:
            if not self._running:
                return False
            self._was_running_before_lock = True
            self._pause_locked()
            self._logger.info("Screen locked: session suspended")
            snapshot = self._snapshot_locked()
        self._publish(PomodoroUpdate(ACTION_LOCK, snapshot))
        return True

    def handle_screen_unlock(self) -> bool:
        with self._lock:
            if not self._was_running_before_lock:
                return False
            self._start_locked()
            self._was_running_before_lock = False
            self._logger.info("Screen unlocked: session resumed")
            snapshot = self._snapshot_locked()
        self._publish(PomodoroUpdate(ACTION_UNLOCK, snapshot))
        return True

    # Configuration

    def set_work_duration(self, seconds: int) -> PomodoroSnapshot:
        return self._configure("work_duration", seconds, rebase_phase=PHASE_WORK)

    def set_break_duration(self, seconds: int) -> PomodoroSnapshot:
        return self._configure("break_duration", seconds, rebase_phase=PHASE_BREAK)

    def set_long_break_duration(self, seconds: int) -> PomodoroSnapshot:
        return self._configure(
            "long_break_duration",
            seconds,
            rebase_phase=PHASE_LONG_BREAK,
        )

    def set_intervals_until_long_break(self, intervals: int) -> PomodoroSnapshot:
        return self._configure("intervals_until_long_break", intervals)

    def set_sound_volume(self, volume: float) -> PomodoroSnapshot:
        snapshot = self._configure("sound_volume", volume)
        self._forward_volume(snapshot.config.sound_volume)
        return snapshot

    def cleanup(self) -> None:
        """Stop ticking and release audio resources at process teardown."""
        self.pause()
        if self._sound_player is None:
            return
        try:
            self._sound_player.cleanup()
        except Exception as error:
            self._logger.error("Audio cleanup failed: %s", error)

    # Internals

    def _start_locked(self) -> bool:
        if self._running:
            return False
        self._running = True
        self._generation += 1
        generation = self._generation
        self._subscription = self._tick_source.subscribe(
            lambda: self._tick(generation=generation)
        )
        self._logger.info(
            "Pomodoro started: phase=%s remaining=%ss",
            self._phase,
            self._time_remaining,
        )
        return True

    def _pause_locked(self) -> bool:
        if not self._running:
            return False
        self._running = False
        self._generation += 1
        subscription = self._subscription
        self._subscription = None
        if subscription is not None:
            subscription.cancel()
        self._logger.info(
            "Pomodoro paused: phase=%s remaining=%ss",
            self._phase,
            self._time_remaining,
        )
        return True

    def _tick(self, generation: Optional[int]) -> Optional[PhaseTransition]:
        with self._lock:
            if not self._running:
                return None
            if generation is not None and generation != self._generation:
                # Late callback from a subscription that was already replaced.
                return None

            transition: Optional[PhaseTransition] = None
            if self._time_remaining > 0:
                self._time_remaining -= 1
            if self._time_remaining <= 0:
                transition = self._advance_phase_locked()
            snapshot = self._snapshot_locked()

        if transition is None:
            self._publish(PomodoroUpdate(ACTION_TICK, snapshot))
            return None

        self._dispatch_transition(transition)
        self._publish(PomodoroUpdate(ACTION_TRANSITION, snapshot, transition))
        return transition

    def _advance_phase_locked(self) -> PhaseTransition:
        previous: PomodoroPhase = self._phase
        if previous == PHASE_WORK:
            self._completed_intervals += 1
            if self._completed_intervals >= self._config.intervals_until_long_break:
                self._phase = PHASE_LONG_BREAK
                self._completed_intervals = 0
            else:
                self._phase = PHASE_BREAK
        else:
            self._phase = PHASE_WORK

        self._time_remaining = _phase_duration(self._config, self._phase)
        self._logger.info(
            "Pomodoro phase changed: %s -> %s duration=%ss intervals=%d/%d",
            previous,
            self._phase,
            self._time_remaining,
            self._completed_intervals,
            self._config.intervals_until_long_break,
        )
        return PhaseTransition(
            previous_phase=previous,
            phase=self._phase,
            duration_seconds=self._time_remaining,
            completed_intervals=self._completed_intervals,
        )

    def _dispatch_transition(self, transition: PhaseTransition) -> None:
        title, body = transition_notification_text(
            transition.phase,
            transition.duration_seconds,
        )
        if self._notifier is not None:
            try:
                self._notifier.notify(title, body)
            except Exception as error:
                self._logger.error("Transition notification failed: %s", error)
        if self._sound_player is not None:
            try:
                self._sound_player.play_sound(transition.sound_name)
            except Exception as error:
                self._logger.error(
                    "Transition sound '%s' failed: %s",
                    transition.sound_name,
                    error,
                )

    def _configure(
        self,
        field: str,
        value,
        *,
        rebase_phase: Optional[str] = None,
    ) -> PomodoroSnapshot:
        with self._lock:
            requested = replace(self._config, **{field: value})
            config = requested.clamped()
            applied = getattr(config, field)
            if float(applied) != float(value):
                self._logger.warning(
                    "Timer setting %s=%r adjusted to %r",
                    field,
                    value,
                    applied,
                )
            self._config = config
            self._completed_intervals = min(
                self._completed_intervals,
                config.intervals_until_long_break - 1,
            )
            if rebase_phase == self._phase and not self._running:
                self._time_remaining = _phase_duration(config, self._phase)
            snapshot = self._snapshot_locked()
        self._publish(PomodoroUpdate(ACTION_CONFIGURE, snapshot))
        return snapshot

    def _forward_volume(self, volume: float) -> None:
        if self._sound_player is None:
            return
        try:
            self._sound_player.set_volume(volume)
        except Exception as error:
            self._logger.error("Failed to apply sound volume: %s", error)

    def _publish(self, update: PomodoroUpdate) -> None:
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(update)
            except Exception as error:
                self._logger.error(
                    "Pomodoro listener failed: %s",
                    error,
                    exc_info=True,
                )

    def _result_locked(
        self,
        action: str,
        accepted: bool,
        reason: str,
    ) -> PomodoroActionResult:
        return PomodoroActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _snapshot_locked(self) -> PomodoroSnapshot:
        return PomodoroSnapshot(
            phase=self._phase,
            time_remaining=self._time_remaining,
            is_running=self._running,
            completed_intervals=self._completed_intervals,
            config=self._config,
        )


def _phase_duration(config: TimerConfig, phase: str) -> int:
    if phase == PHASE_LONG_BREAK:
        return config.long_break_duration
    if phase == PHASE_BREAK:
        return config.break_duration
    return config.work_duration
