"""Protocols for the audio and notification collaborators of the timer."""

from __future__ import annotations

from typing import Protocol


class SoundPlayerLike(Protocol):
    def play_sound(self, name: str) -> None:
        ...

    def set_volume(self, volume: float) -> None:
        ...

    def cleanup(self) -> None:
        ...


class NotifierLike(Protocol):
    def notify(self, title: str, body: str) -> None:
        ...
