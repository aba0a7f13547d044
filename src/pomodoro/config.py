"""User-tunable timer configuration with range clamping."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import (
    BREAK_SECONDS_RANGE,
    DEFAULT_BREAK_SECONDS,
    DEFAULT_INTERVALS_UNTIL_LONG_BREAK,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_SOUND_VOLUME,
    DEFAULT_WORK_SECONDS,
    INTERVALS_RANGE,
    LONG_BREAK_SECONDS_RANGE,
    VOLUME_RANGE,
    WORK_SECONDS_RANGE,
)


@dataclass(frozen=True)
class TimerConfig:
    """Durations in seconds, long-break cadence, and cue volume."""
    work_duration: int = DEFAULT_WORK_SECONDS
    break_duration: int = DEFAULT_BREAK_SECONDS
    long_break_duration: int = DEFAULT_LONG_BREAK_SECONDS
    intervals_until_long_break: int = DEFAULT_INTERVALS_UNTIL_LONG_BREAK
    sound_volume: float = DEFAULT_SOUND_VOLUME

    def clamped(self) -> "TimerConfig":
        """Return a copy with every field pulled into its valid range."""
        return TimerConfig(
            work_duration=clamp_int(self.work_duration, WORK_SECONDS_RANGE),
            break_duration=clamp_int(self.break_duration, BREAK_SECONDS_RANGE),
            long_break_duration=clamp_int(
                self.long_break_duration,
                LONG_BREAK_SECONDS_RANGE,
            ),
            intervals_until_long_break=clamp_int(
                self.intervals_until_long_break,
                INTERVALS_RANGE,
            ),
            sound_volume=clamp_float(self.sound_volume, VOLUME_RANGE),
        )

    @classmethod
    def from_minutes(
        cls,
        *,
        work_minutes: float,
        break_minutes: float,
        long_break_minutes: float,
        intervals_until_long_break: int,
        sound_volume: float,
    ) -> "TimerConfig":
        return cls(
            work_duration=clamp_int(work_minutes * 60, WORK_SECONDS_RANGE),
            break_duration=clamp_int(break_minutes * 60, BREAK_SECONDS_RANGE),
            long_break_duration=clamp_int(
                long_break_minutes * 60,
                LONG_BREAK_SECONDS_RANGE,
            ),
            intervals_until_long_break=clamp_int(
                intervals_until_long_break,
                INTERVALS_RANGE,
            ),
            sound_volume=clamp_float(sound_volume, VOLUME_RANGE),
        )


def clamp_int(value: float, bounds: tuple[int, int]) -> int:
    """Round `value` and pull it into `bounds`; infinities land on a bound."""
    low, high = bounds
    number = clamp_float(value, (float(low), float(high)))
    return int(round(number))


def clamp_float(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    number = float(value)
    if math.isnan(number):
        raise ValueError("Timer setting must be a number, got NaN")
    return max(low, min(high, number))
