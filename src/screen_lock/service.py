"""Screen lock monitor that turns probe readings into lock/unlock events."""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from .events import (
    EventPublisher,
    ScreenLockEvent,
    ScreenLockedEvent,
    ScreenUnlockedEvent,
)
from .probes import ScreenLockProbe, ScreenLockProbeError


class ScreenLockMonitor:
    """Polls a lock probe and publishes one event per real lock transition.

    Repeated readings of the same state are collapsed, so several OS signals
    for one physical lock produce a single `ScreenLockedEvent`. The session is
    assumed unlocked when monitoring starts.
    """

    def __init__(
        self,
        probe: ScreenLockProbe,
        publisher: EventPublisher,
        *,
        poll_interval_seconds: float = 2.0,
        logger: Optional[logging.Logger] = None,
    ):
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be greater than zero")

        self._probe = probe
        self._publisher = publisher
        self._poll_interval_seconds = poll_interval_seconds
        self._logger = logger or logging.getLogger(__name__)
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._running_lock = threading.Lock()
        self._running = False
        self._locked = False
        self._probe_failing = False

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is currently running."""
        with self._running_lock:
            return (
                self._running and self._thread is not None and self._thread.is_alive()
            )

    @property
    def is_locked(self) -> bool:
        return self._locked

    def start(self) -> None:
        """Start polling on a daemon thread."""
        with self._running_lock:
            if self._running and self._thread is not None and self._thread.is_alive():
                self._logger.warning("Screen lock monitor is already running")
                return

            self._logger.debug("Starting screen lock monitor")
            self._stop_event.clear()
            self._running = True
            self._thread = threading.Thread(
                target=self._run, daemon=True, name="screen-lock-monitor"
            )
            self._thread.start()

    def stop(self, timeout_seconds: float = 5.0) -> None:
        """Stop polling and wait for the thread to exit."""
        with self._running_lock:
            if not self._running:
                return

        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=timeout_seconds)
            if self._thread.is_alive():
                self._logger.error(
                    "Screen lock monitor did not stop within %.1fs",
                    timeout_seconds,
                )
                return

        with self._running_lock:
            self._running = False
        self._logger.debug("Screen lock monitor stopped")

    def poll_once(self) -> Optional[ScreenLockEvent]:
        """Read the probe once and publish an event if the lock state changed."""
        try:
            locked = self._probe()
        except Exception as error:
            if not self._probe_failing:
                self._logger.warning(
                    "Screen lock probe failed: %s",
                    error,
                    exc_info=not isinstance(error, ScreenLockProbeError),
                )
            self._probe_failing = True
            return None

        if self._probe_failing:
            self._logger.info("Screen lock probe recovered")
        self._probe_failing = False

        if locked is None or locked == self._locked:
            return None

        self._locked = locked
        now = datetime.now(timezone.utc)
        event: ScreenLockEvent = (
            ScreenLockedEvent(occurred_at=now)
            if locked
            else ScreenUnlockedEvent(occurred_at=now)
        )
        self._logger.debug("Screen lock state changed: locked=%s", locked)
        self._publisher.publish(event)
        return event

    def _run(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    self.poll_once()
                except Exception as error:
                    self._logger.error(
                        "Screen lock poll failed: %s",
                        error,
                        exc_info=True,
                    )
                self._stop_event.wait(self._poll_interval_seconds)
        finally:
            with self._running_lock:
                self._running = False
            self._logger.debug("Screen lock monitor terminated")
