from .config import TimerConfig
from .service import (
    PhaseTransition,
    PomodoroAction,
    PomodoroActionResult,
    PomodoroListener,
    PomodoroPhase,
    PomodoroSnapshot,
    PomodoroTimer,
    PomodoroUpdate,
)
from .ticks import MonotonicTickSource, TickSource, TickSubscription

__all__ = [
    "MonotonicTickSource",
    "PhaseTransition",
    "PomodoroAction",
    "PomodoroActionResult",
    "PomodoroListener",
    "PomodoroPhase",
    "PomodoroSnapshot",
    "PomodoroTimer",
    "PomodoroUpdate",
    "TickSource",
    "TickSubscription",
    "TimerConfig",
]
