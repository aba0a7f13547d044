"""Presentation event type constants."""

from __future__ import annotations

# Presentation event types
EVENT_POMODORO = "pomodoro"
EVENT_TRANSITION = "transition"
EVENT_COMMAND_REJECTED = "command_rejected"
EVENT_ERROR = "error"

PRESENTATION_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_POMODORO,
        EVENT_TRANSITION,
        EVENT_COMMAND_REJECTED,
        EVENT_ERROR,
    }
)
