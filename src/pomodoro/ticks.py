"""Polled one-second tick source driven by the runtime loop."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

TICK_INTERVAL_SECONDS = 1.0


class TickSubscription(Protocol):
    def cancel(self) -> None:
        ...


class TickSource(Protocol):
    """Clock collaborator: one callback per elapsed second while subscribed."""
    def subscribe(self, on_tick: Callable[[], None]) -> TickSubscription:
        ...


class _MonotonicSubscription:
    def __init__(self, on_tick: Callable[[], None], due_at: float):
        self.on_tick = on_tick
        self.due_at = due_at
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class MonotonicTickSource:
    """Single-subscription tick source polled from the owning loop thread.

    Subscribing replaces (and cancels) any previous subscription. `poll()`
    fires at most one callback per call; seconds missed while the loop was
    stalled are dropped rather than replayed in a burst.
    """

    def __init__(
        self,
        *,
        monotonic_now: Callable[[], float] | None = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._now = monotonic_now or time.monotonic
        self._logger = logger or logging.getLogger("ticks")
        self._subscription: Optional[_MonotonicSubscription] = None

    @property
    def is_subscribed(self) -> bool:
        subscription = self._subscription
        return subscription is not None and not subscription.cancelled

    def subscribe(self, on_tick: Callable[[], None]) -> TickSubscription:
        if self._subscription is not None:
            self._subscription.cancel()
        subscription = _MonotonicSubscription(
            on_tick,
            due_at=self._now() + TICK_INTERVAL_SECONDS,
        )
        self._subscription = subscription
        return subscription

    def seconds_until_due(self) -> Optional[float]:
        subscription = self._subscription
        if subscription is None or subscription.cancelled:
            return None
        return max(0.0, subscription.due_at - self._now())

    def poll(self) -> bool:
        """Deliver the pending tick if one is due. Returns True if one fired."""
        subscription = self._subscription
        if subscription is None:
            return False
        if subscription.cancelled:
            self._subscription = None
            return False

        now = self._now()
        if now < subscription.due_at:
            return False

        subscription.due_at += TICK_INTERVAL_SECONDS
        if subscription.due_at <= now:
            skipped = int((now - subscription.due_at) // TICK_INTERVAL_SECONDS) + 1
            self._logger.debug("Dropping %d late tick(s)", skipped)
            subscription.due_at = now + TICK_INTERVAL_SECONDS

        subscription.on_tick()
        return True
