from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from contracts.ui_protocol import (
    EVENT_COMMAND_REJECTED,
    EVENT_POMODORO,
    EVENT_TRANSITION,
    PRESENTATION_EVENT_TYPES,
)
from pomodoro import PhaseTransition, PomodoroSnapshot, PomodoroUpdate
from pomodoro.constants import ACTION_TRANSITION
from pomodoro.messages import status_title, transition_notification_text


class PresenterLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    """Fans timer updates out to presentation sinks as flat event payloads."""
    def __init__(
        self,
        presenters: Optional[list[PresenterLike]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._presenters = list(presenters or [])
        self._logger = logger or logging.getLogger("runtime.ui")

    def publish(self, event_type: str, **payload: Any) -> None:
        if event_type not in PRESENTATION_EVENT_TYPES:
            self._logger.warning("Dropping unknown presentation event: %s", event_type)
            return
        for presenter in tuple(self._presenters):
            try:
                presenter.publish(event_type, **payload)
            except Exception as error:
                self._logger.error(
                    "Presenter %s failed on %s: %s",
                    type(presenter).__name__,
                    event_type,
                    error,
                )

    def handle_update(self, update: PomodoroUpdate) -> None:
        """Timer listener entry point."""
        if update.action == ACTION_TRANSITION and update.transition is not None:
            self.publish_transition(update.transition, update.snapshot)
        self.publish_pomodoro_update(update.snapshot, action=update.action)

    def publish_pomodoro_update(
        self,
        snapshot: PomodoroSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "phase": snapshot.phase,
            "time_remaining": snapshot.time_remaining,
            "is_running": snapshot.is_running,
            "completed_intervals": snapshot.completed_intervals,
            "intervals_until_long_break": snapshot.config.intervals_until_long_break,
            "title": status_title(snapshot),
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        self.publish(EVENT_POMODORO, **payload)

    def publish_transition(
        self,
        transition: PhaseTransition,
        snapshot: PomodoroSnapshot,
    ) -> None:
        title, body = transition_notification_text(
            transition.phase,
            transition.duration_seconds,
        )
        self.publish(
            EVENT_TRANSITION,
            previous_phase=transition.previous_phase,
            phase=transition.phase,
            duration_seconds=transition.duration_seconds,
            completed_intervals=snapshot.completed_intervals,
            message=f"{title} {body}",
        )

    def publish_command_rejected(self, action: str, reason: str) -> None:
        self.publish(EVENT_COMMAND_REJECTED, action=action, reason=reason)
