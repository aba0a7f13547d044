"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Startup durations and cadence from `[timer]`; clamped by the timer."""
    work_minutes: float = 25.0
    break_minutes: float = 5.0
    long_break_minutes: float = 15.0
    intervals_until_long_break: int = 4
    sound_volume: float = 0.75
    autostart: bool = False


@dataclass(frozen=True)
class AudioSettings:
    """Sound cue settings from `[audio]`."""
    enabled: bool = True
    sounds_dir: str = ""
    output_device: Optional[int] = None


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    backend: str = "auto"
    sound: str = "default"


@dataclass(frozen=True)
class ScreenLockSettings:
    """Screen lock monitoring settings from `[screen_lock]`."""
    enabled: bool = True
    poll_interval_seconds: float = 2.0


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings
    audio: AudioSettings
    notifications: NotificationSettings
    screen_lock: ScreenLockSettings
    logging: LoggingSettings
    source_file: str
