"""Terminal presentation: status line rendering and stdin command reader."""

from __future__ import annotations

import logging
import sys
import threading
from queue import Queue
from typing import Any, Optional, TextIO

from contracts.ui_protocol import (
    EVENT_COMMAND_REJECTED,
    EVENT_ERROR,
    EVENT_POMODORO,
    EVENT_TRANSITION,
)
from pomodoro.constants import ACTION_TICK

from .commands import CommandError, parse_command


class ConsolePresenter:
    """Renders the countdown title the way a status-bar item would.

    On a terminal the title is redrawn in place every tick; otherwise only
    state changes are written, one per line.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout
        self._interactive = bool(getattr(self._stream, "isatty", lambda: False)())
        self._last_title = ""

    def publish(self, event_type: str, **payload: Any) -> None:
        if event_type == EVENT_POMODORO:
            self._render_title(str(payload.get("title", "")), payload.get("action"))
        elif event_type == EVENT_TRANSITION:
            self._write_line(str(payload.get("message", "")))
        elif event_type == EVENT_COMMAND_REJECTED:
            self._write_line(
                f"Command '{payload.get('action')}' ignored: {payload.get('reason')}"
            )
        elif event_type == EVENT_ERROR:
            self._write_line(f"Error: {payload.get('message', '')}")

    def _render_title(self, title: str, action: Any) -> None:
        if not title:
            return
        if self._interactive:
            padding = " " * max(0, len(self._last_title) - len(title))
            self._stream.write(f"\r{title}{padding}")
            self._stream.flush()
        elif action != ACTION_TICK:
            self._stream.write(f"{title}\n")
            self._stream.flush()
        self._last_title = title

    def _write_line(self, text: str) -> None:
        prefix = "\n" if self._interactive and self._last_title else ""
        self._stream.write(f"{prefix}{text}\n")
        self._stream.flush()
        self._last_title = ""


class ConsoleCommandReader:
    """Reads command lines on a daemon thread and queues parsed commands."""

    def __init__(
        self,
        event_queue: Queue,
        stream: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._event_queue = event_queue
        self._stream = stream or sys.stdin
        self._logger = logger or logging.getLogger("runtime.console")
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="console-commands",
        )
        self._thread.start()

    def stop(self) -> None:
        # A blocked readline cannot be interrupted; the daemon thread ends with
        # the process.
        self._stop_event.set()

    def feed(self, line: str) -> bool:
        """Parse one line and queue it. Returns True when a command was queued."""
        try:
            command = parse_command(line)
        except CommandError as error:
            self._logger.warning("%s", error)
            return False
        if command is None:
            return False
        self._event_queue.put(command)
        return True

    def _run(self) -> None:
        for line in self._stream:
            if self._stop_event.is_set():
                break
            self.feed(line)
        self._logger.debug("Console command input closed")
