"""Public exports for sound cue playback components."""

from .config import AudioConfig, AudioConfigurationError
from .cues import AudioError, SoundCuePlayer, load_cue
from .output import SoundDeviceAudioOutput

__all__ = [
    "AudioConfig",
    "AudioConfigurationError",
    "AudioError",
    "SoundCuePlayer",
    "SoundDeviceAudioOutput",
    "load_cue",
]
