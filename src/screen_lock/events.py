"""Event dataclasses and publisher contracts emitted by the screen lock monitor."""

from dataclasses import dataclass
from datetime import datetime
from queue import Queue
from typing import Protocol


@dataclass(frozen=True)
class ScreenLockedEvent:
    """Event emitted once when the session transitions to locked."""
    occurred_at: datetime


@dataclass(frozen=True)
class ScreenUnlockedEvent:
    """Event emitted once when the session transitions to unlocked."""
    occurred_at: datetime


ScreenLockEvent = ScreenLockedEvent | ScreenUnlockedEvent


class EventPublisher(Protocol):
    """Protocol for publishing screen lock events."""

    def publish(self, event: ScreenLockEvent) -> None: ...


class QueueEventPublisher:
    """Event publisher that pushes events to a queue."""

    def __init__(self, queue: Queue):
        self._queue = queue

    def publish(self, event: ScreenLockEvent) -> None:
        self._queue.put(event)
