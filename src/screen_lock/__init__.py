"""Screen lock detection feeding the pomodoro suspension policy."""

from .events import (
    EventPublisher,
    QueueEventPublisher,
    ScreenLockEvent,
    ScreenLockedEvent,
    ScreenUnlockedEvent,
)
from .probes import (
    LoginctlLockProbe,
    MacOSLockProbe,
    ScreenLockProbe,
    ScreenLockProbeError,
    default_probe,
)
from .service import ScreenLockMonitor

__all__ = [
    # Events
    "EventPublisher",
    "QueueEventPublisher",
    "ScreenLockEvent",
    "ScreenLockedEvent",
    "ScreenUnlockedEvent",
    # Probes
    "LoginctlLockProbe",
    "MacOSLockProbe",
    "ScreenLockProbe",
    "ScreenLockProbeError",
    "default_probe",
    # Service
    "ScreenLockMonitor",
]
