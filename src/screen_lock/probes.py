"""Platform probes that report whether the interactive session is locked."""

from __future__ import annotations

import os
import platform
import re
import subprocess
from typing import Callable, Optional, Protocol

_IOREG_LOCKED = re.compile(r'"CGSSessionScreenIsLocked"\s*=\s*Yes')

Runner = Callable[..., subprocess.CompletedProcess]


class ScreenLockProbeError(Exception):
    """Raised when a lock probe cannot query the operating system."""


class ScreenLockProbe(Protocol):
    def __call__(self) -> Optional[bool]:
        """Return True when locked, False when unlocked, None when unknown."""
        ...


def _run(runner: Runner, args: list[str], timeout_seconds: float) -> str:
    try:
        completed = runner(
            args,
            capture_output=True,
            text=True,
            timeout=timeout_seconds,
            check=False,
        )
    except (OSError, subprocess.SubprocessError, ValueError) as error:
        # ValueError covers UnicodeDecodeError from undecodable output.
        raise ScreenLockProbeError(f"{args[0]} failed: {error}") from error
    if completed.returncode != 0:
        detail = (completed.stderr or "").strip() or f"exit code {completed.returncode}"
        raise ScreenLockProbeError(f"{args[0]} failed: {detail}")
    return completed.stdout or ""


class MacOSLockProbe:
    """Reads the console session lock flag from the IORegistry root."""
    def __init__(self, *, runner: Runner = subprocess.run, timeout_seconds: float = 2.0):
        self._runner = runner
        self._timeout_seconds = timeout_seconds

    def __call__(self) -> Optional[bool]:
        output = _run(self._runner, ["ioreg", "-n", "Root", "-d1"], self._timeout_seconds)
        if _IOREG_LOCKED.search(output):
            return True
        # The lock key is omitted while unlocked; no console users means unknown.
        if "IOConsoleUsers" in output:
            return False
        return None


class LoginctlLockProbe:
    """Reads the systemd-logind `LockedHint` of the current session."""
    def __init__(
        self,
        session_id: Optional[str] = None,
        *,
        runner: Runner = subprocess.run,
        timeout_seconds: float = 2.0,
    ):
        self._session_id = session_id or os.environ.get("XDG_SESSION_ID", "").strip() or "self"
        self._runner = runner
        self._timeout_seconds = timeout_seconds

    def __call__(self) -> Optional[bool]:
        output = _run(
            self._runner,
            ["loginctl", "show-session", self._session_id, "-p", "LockedHint", "--value"],
            self._timeout_seconds,
        )
        value = output.strip().lower()
        if value == "yes":
            return True
        if value == "no":
            return False
        return None


def default_probe(system: Optional[str] = None) -> Optional[ScreenLockProbe]:
    """Pick the lock probe for the running platform, or None if unsupported."""
    system_name = (system or platform.system()).lower()
    if system_name == "darwin":
        return MacOSLockProbe()
    if system_name == "linux":
        return LoginctlLockProbe()
    return None
