"""Status and notification text builders for pomodoro phases."""

from __future__ import annotations

from .constants import PHASE_BREAK, PHASE_LONG_BREAK, PHASE_WORK


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def phase_label(phase: str) -> str:
    if phase == PHASE_WORK:
        return "Work"
    if phase == PHASE_LONG_BREAK:
        return "Long Break"
    if phase == PHASE_BREAK:
        return "Break"
    return phase


def status_title(snapshot) -> str:
    """Build the one-line status title shown in place of the menu-bar text."""
    paused = "" if snapshot.is_running else " (paused)"
    return (
        f"{phase_label(snapshot.phase)} {format_duration(snapshot.time_remaining)}"
        f" [{snapshot.completed_intervals}/{snapshot.config.intervals_until_long_break}]"
        f"{paused}"
    )


def transition_notification_text(phase: str, duration_seconds: int) -> tuple[str, str]:
    """Return `(title, body)` announcing entry into `phase`."""
    minutes = max(0, int(duration_seconds)) // 60
    if phase == PHASE_WORK:
        return "Time to Focus!", f"Let's start a {minutes} minute work session."
    return "Break Time!", f"Time for a {minutes} minute break."
