"""Phase, action, reason, and range constants used by pomodoro runtime logic."""

from __future__ import annotations

PHASE_WORK = "work"
PHASE_BREAK = "break"
PHASE_LONG_BREAK = "long_break"

BREAK_PHASES: frozenset[str] = frozenset({PHASE_BREAK, PHASE_LONG_BREAK})

SOUND_WORK = "work"
SOUND_BREAK = "break"

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_INTERVALS_UNTIL_LONG_BREAK = 4
DEFAULT_SOUND_VOLUME = 0.75

WORK_SECONDS_RANGE = (1 * 60, 120 * 60)
BREAK_SECONDS_RANGE = (1 * 60, 60 * 60)
LONG_BREAK_SECONDS_RANGE = (15 * 60, 45 * 60)
INTERVALS_RANGE = (2, 8)
VOLUME_RANGE = (0.0, 1.0)

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_RESET = "reset"
ACTION_TICK = "tick"
ACTION_TRANSITION = "transition"
ACTION_CONFIGURE = "configure"
ACTION_LOCK = "lock"
ACTION_UNLOCK = "unlock"
ACTION_SYNC = "sync"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_UNSUPPORTED_ACTION = "unsupported_action"
REASON_INVALID_VALUE = "invalid_value"
REASON_STARTUP = "startup"
