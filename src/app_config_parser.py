"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    LoggingSettings,
    NotificationSettings,
    ScreenLockSettings,
    TimerSettings,
)

_ALLOWED_NOTIFICATION_BACKENDS = {"auto", "pync", "notify-send", "log"}
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
DEFAULT_SOUNDS_DIR = "sounds"


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        timer=_parse_timer_settings(_section(raw, "timer")),
        audio=_parse_audio_settings(_section(raw, "audio"), base_dir=base_dir),
        notifications=_parse_notification_settings(_section(raw, "notifications")),
        screen_lock=_parse_screen_lock_settings(_section(raw, "screen_lock")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    return TimerSettings(
        work_minutes=_as_float(section.get("work_minutes", 25), "timer.work_minutes"),
        break_minutes=_as_float(section.get("break_minutes", 5), "timer.break_minutes"),
        long_break_minutes=_as_float(
            section.get("long_break_minutes", 15),
            "timer.long_break_minutes",
        ),
        intervals_until_long_break=_as_int(
            section.get("intervals_until_long_break", 4),
            "timer.intervals_until_long_break",
        ),
        sound_volume=_as_float(section.get("sound_volume", 0.75), "timer.sound_volume"),
        autostart=_as_bool(section.get("autostart", False), "timer.autostart"),
    )


def _parse_audio_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> AudioSettings:
    sounds_dir = _as_str(section.get("sounds_dir", DEFAULT_SOUNDS_DIR), "audio.sounds_dir")
    return AudioSettings(
        enabled=_as_bool(section.get("enabled", True), "audio.enabled"),
        sounds_dir=_resolve_path(base_dir, sounds_dir or DEFAULT_SOUNDS_DIR),
        output_device=(
            _as_int(section.get("output_device"), "audio.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    backend = _as_str(section.get("backend", "auto"), "notifications.backend").lower()
    if backend not in _ALLOWED_NOTIFICATION_BACKENDS:
        allowed = ", ".join(sorted(_ALLOWED_NOTIFICATION_BACKENDS))
        raise AppConfigurationError(f"notifications.backend must be one of: {allowed}.")
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", True), "notifications.enabled"),
        backend=backend,
        sound=_as_str(section.get("sound", "default"), "notifications.sound"),
    )


def _parse_screen_lock_settings(section: Mapping[str, Any]) -> ScreenLockSettings:
    poll_interval = _as_float(
        section.get("poll_interval_seconds", 2.0),
        "screen_lock.poll_interval_seconds",
    )
    if poll_interval <= 0:
        raise AppConfigurationError("screen_lock.poll_interval_seconds must be positive.")
    return ScreenLockSettings(
        enabled=_as_bool(section.get("enabled", True), "screen_lock.enabled"),
        poll_interval_seconds=poll_interval,
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a number.") from error
    else:
        raise AppConfigurationError(f"{field} must be a number.")
    if not math.isfinite(number):
        raise AppConfigurationError(f"{field} must be a finite number.")
    return number


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
