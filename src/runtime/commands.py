"""Presentation command events and their text parser."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_STATUS = "status"
COMMAND_QUIT = "quit"
COMMAND_WORK = "work"
COMMAND_BREAK = "break"
COMMAND_LONG_BREAK = "long_break"
COMMAND_INTERVALS = "intervals"
COMMAND_VOLUME = "volume"

SIMPLE_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_TOGGLE,
        COMMAND_RESET,
        COMMAND_STATUS,
        COMMAND_QUIT,
    }
)
VALUE_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_WORK,
        COMMAND_BREAK,
        COMMAND_LONG_BREAK,
        COMMAND_INTERVALS,
        COMMAND_VOLUME,
    }
)

_ALIASES = {
    "s": COMMAND_START,
    "p": COMMAND_PAUSE,
    "t": COMMAND_TOGGLE,
    "r": COMMAND_RESET,
    "q": COMMAND_QUIT,
    "exit": COMMAND_QUIT,
    "?": COMMAND_STATUS,
    "longbreak": COMMAND_LONG_BREAK,
}


class CommandError(ValueError):
    """Raised when a command line cannot be parsed."""


@dataclass(frozen=True)
class TimerCommandEvent:
    """Command issued by presentation; durations are in minutes."""
    action: str
    value: Optional[float] = None


def parse_command(line: str) -> Optional[TimerCommandEvent]:
    """Parse `start`, `work 25`, `volume 60` style input. Blank lines give None."""
    parts = line.strip().lower().split()
    if not parts:
        return None

    action = parts[0].replace("-", "_")
    action = _ALIASES.get(action, action)

    if action in SIMPLE_COMMANDS:
        if len(parts) != 1:
            raise CommandError(f"'{action}' takes no arguments")
        return TimerCommandEvent(action=action)

    if action in VALUE_COMMANDS:
        if len(parts) != 2:
            raise CommandError(f"'{action}' expects exactly one number")
        try:
            value = float(parts[1].rstrip("%"))
        except ValueError as error:
            raise CommandError(f"'{action}' expects a number, got: {parts[1]}") from error
        if not math.isfinite(value):
            raise CommandError(f"'{action}' expects a finite number, got: {parts[1]}")
        return TimerCommandEvent(action=action, value=value)

    raise CommandError(f"Unknown command: {parts[0]}")
