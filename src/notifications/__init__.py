"""Desktop notification delivery for phase transitions."""

from .backends import (
    LogNotificationBackend,
    NotificationBackend,
    NotificationError,
    NotifySendBackend,
    TerminalNotifierBackend,
    create_notification_backend,
)
from .service import NotificationService

__all__ = [
    "LogNotificationBackend",
    "NotificationBackend",
    "NotificationError",
    "NotificationService",
    "NotifySendBackend",
    "TerminalNotifierBackend",
    "create_notification_backend",
]
