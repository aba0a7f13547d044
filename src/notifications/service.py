"""Fire-and-forget notification delivery on a background worker."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Optional

from .backends import NotificationBackend


class NotificationService:
    """Queues notifications for a single worker so callers never block."""

    def __init__(
        self,
        backend: NotificationBackend,
        logger: Optional[logging.Logger] = None,
    ):
        self._backend = backend
        self._logger = logger or logging.getLogger("notifications")
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="notify",
        )
        self._closed = False

    def notify(self, title: str, body: str) -> None:
        if self._closed:
            self._logger.debug("Dropping notification after shutdown: %s", title)
            return
        try:
            future = self._executor.submit(self._backend.send, title, body)
        except RuntimeError as error:
            self._logger.warning("Notification executor unavailable: %s", error)
            return
        future.add_done_callback(self._log_failure)

    def shutdown(self, wait: bool = False) -> None:
        self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def _log_failure(self, future: concurrent.futures.Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.error("Notification delivery failed: %s", error)
