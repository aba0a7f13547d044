"""Configuration model for sound cue assets and output selection."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class AudioConfigurationError(Exception):
    """Raised when audio configuration is invalid."""


@dataclass(frozen=True)
class AudioConfig:
    """Resolved sound cue directory and optional output-device selection."""
    sounds_dir: str
    output_device_index: Optional[int] = None
    blocksize: int = 2048

    @classmethod
    def from_settings(cls, settings) -> "AudioConfig":
        sounds_dir = (settings.sounds_dir or "").strip()
        if not sounds_dir:
            raise AudioConfigurationError("audio sounds_dir cannot be empty")

        output_device = settings.output_device
        if output_device is not None and output_device < 0:
            raise AudioConfigurationError(
                f"audio output_device must be >= 0, got: {output_device}"
            )

        return cls(
            sounds_dir=str(Path(sounds_dir).expanduser()),
            output_device_index=output_device,
        )
