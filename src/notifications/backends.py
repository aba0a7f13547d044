"""Desktop notification backends for phase-change announcements."""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from typing import Callable, Optional, Protocol

BACKEND_AUTO = "auto"
BACKEND_PYNC = "pync"
BACKEND_NOTIFY_SEND = "notify-send"
BACKEND_LOG = "log"

SUPPORTED_BACKENDS: frozenset[str] = frozenset(
    {BACKEND_AUTO, BACKEND_PYNC, BACKEND_NOTIFY_SEND, BACKEND_LOG}
)


class NotificationError(Exception):
    """Raised when a desktop notification cannot be delivered."""


class NotificationBackend(Protocol):
    def send(self, title: str, body: str) -> None:
        ...


class TerminalNotifierBackend:
    """macOS Notification Center delivery through pync/terminal-notifier."""
    def __init__(self, sound: str = "default"):
        self._sound = sound

    def send(self, title: str, body: str) -> None:
        try:
            from pync import Notifier
        except ImportError as error:
            raise NotificationError("pync is not installed") from error

        kwargs = {"title": title}
        if self._sound:
            kwargs["sound"] = self._sound
        try:
            Notifier.notify(body, **kwargs)
        except Exception as error:
            raise NotificationError(f"terminal-notifier failed: {error}") from error


class NotifySendBackend:
    """freedesktop notification delivery through the `notify-send` command."""
    def __init__(
        self,
        app_name: str = "Pomodoro",
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        timeout_seconds: float = 5.0,
    ):
        self._app_name = app_name
        self._runner = runner
        self._timeout_seconds = timeout_seconds

    def send(self, title: str, body: str) -> None:
        try:
            completed = self._runner(
                ["notify-send", "--app-name", self._app_name, title, body],
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as error:
            raise NotificationError(f"notify-send failed: {error}") from error

        if completed.returncode != 0:
            detail = (completed.stderr or "").strip() or f"exit code {completed.returncode}"
            raise NotificationError(f"notify-send failed: {detail}")


class LogNotificationBackend:
    """Headless fallback that records notifications in the log."""
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("notifications")

    def send(self, title: str, body: str) -> None:
        self._logger.info("Notification: %s - %s", title, body)


def create_notification_backend(
    name: str = BACKEND_AUTO,
    *,
    sound: str = "default",
    logger: Optional[logging.Logger] = None,
    system: Optional[str] = None,
) -> NotificationBackend:
    """Resolve a backend name to an instance, probing the platform for `auto`."""
    backend = (name or BACKEND_AUTO).strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        allowed = ", ".join(sorted(SUPPORTED_BACKENDS))
        raise NotificationError(f"Notification backend must be one of: {allowed}")

    if backend == BACKEND_AUTO:
        system_name = (system or platform.system()).lower()
        if system_name == "darwin":
            backend = BACKEND_PYNC
        elif system_name == "linux" and shutil.which("notify-send"):
            backend = BACKEND_NOTIFY_SEND
        else:
            backend = BACKEND_LOG

    if backend == BACKEND_PYNC:
        return TerminalNotifierBackend(sound=sound)
    if backend == BACKEND_NOTIFY_SEND:
        return NotifySendBackend()
    return LogNotificationBackend(logger=logger)
