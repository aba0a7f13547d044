"""Sound cue loading and volume-scaled playback for phase transitions."""

from __future__ import annotations

import logging
import threading
import wave
from pathlib import Path
from typing import Optional, Protocol

import numpy as np

SOUND_CUE_NAMES: frozenset[str] = frozenset({"work", "break"})
CUE_FILE_SUFFIX = ".wav"


class AudioError(Exception):
    """Raised when a sound cue cannot be loaded or played."""


class AudioOutputLike(Protocol):
    def play(self, samples: np.ndarray, sample_rate_hz: int) -> None:
        ...

    def stop(self) -> None:
        ...


def load_cue(path: Path) -> tuple[np.ndarray, int]:
    """Decode a 16-bit PCM WAV file into float32 samples in [-1, 1]."""
    try:
        with wave.open(str(path), "rb") as wav_file:
            sample_width = wav_file.getsampwidth()
            channels = wav_file.getnchannels()
            sample_rate_hz = wav_file.getframerate()
            raw = wav_file.readframes(wav_file.getnframes())
    except FileNotFoundError as error:
        raise AudioError(f"Sound cue not found: {path}") from error
    except (wave.Error, EOFError, OSError) as error:
        raise AudioError(f"Failed to read sound cue {path}: {error}") from error

    if sample_width != 2:
        raise AudioError(
            f"Sound cue {path.name} must be 16-bit PCM, got {sample_width * 8}-bit"
        )

    pcm_int16 = np.frombuffer(raw, dtype=np.int16)
    if pcm_int16.size == 0:
        raise AudioError(f"Sound cue {path.name} contains no audio")

    samples = pcm_int16.astype(np.float32) / 32768.0
    if channels > 1:
        samples = samples.reshape(-1, channels)
    return samples, sample_rate_hz


class SoundCuePlayer:
    """Plays the `work` and `break` cues from a directory of WAV files."""

    def __init__(
        self,
        sounds_dir: str | Path,
        output: AudioOutputLike,
        *,
        volume: float = 0.75,
        logger: Optional[logging.Logger] = None,
    ):
        self._sounds_dir = Path(sounds_dir)
        self._output = output
        self._volume = _clamp_volume(volume)
        self._logger = logger or logging.getLogger("audio")
        self._cache: dict[str, tuple[np.ndarray, int]] = {}
        self._missing: set[str] = set()
        self._lock = threading.Lock()

        if not self._sounds_dir.is_dir():
            self._logger.warning("Sound cue directory not found: %s", self._sounds_dir)

    @property
    def volume(self) -> float:
        return self._volume

    def set_volume(self, volume: float) -> None:
        self._volume = _clamp_volume(volume)

    def play_sound(self, name: str) -> None:
        if name not in SOUND_CUE_NAMES:
            raise AudioError(f"Unknown sound cue: {name}")

        cue = self._load(name)
        if cue is None:
            return
        samples, sample_rate_hz = cue
        self._logger.debug(
            "Playing sound cue '%s' at volume %.2f",
            name,
            self._volume,
        )
        self._output.play(samples * np.float32(self._volume), sample_rate_hz)

    def cleanup(self) -> None:
        try:
            self._output.stop()
        finally:
            with self._lock:
                self._cache.clear()
                self._missing.clear()

    def _load(self, name: str) -> Optional[tuple[np.ndarray, int]]:
        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached
            if name in self._missing:
                return None
            path = self._sounds_dir / f"{name}{CUE_FILE_SUFFIX}"
            if not path.is_file():
                self._missing.add(name)
                self._logger.warning(
                    "Sound cue '%s' not found at %s; playing no sound for it",
                    name,
                    path,
                )
                return None
            cue = load_cue(path)
            self._cache[name] = cue
            return cue


def _clamp_volume(volume: float) -> float:
    return max(0.0, min(1.0, float(volume)))
