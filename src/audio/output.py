"""Sounddevice-backed, non-blocking playback for sound cues."""

import logging
import threading
from typing import Any, Optional

import numpy as np
import sounddevice as sd

from .cues import AudioError


class SoundDeviceAudioOutput:
    """Plays PCM arrays through a selected sounddevice output.

    Playback never blocks the caller. Starting a new cue aborts the one still
    playing, so at most one stream is open at a time.
    """
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        blocksize: int = 2048,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._blocksize = blocksize
        self._logger = logger or logging.getLogger(__name__)
        self._stream: Optional[Any] = None
        self._lock = threading.Lock()

    def play(self, samples: np.ndarray, sample_rate_hz: int) -> None:
        if samples.ndim not in (1, 2):
            raise AudioError("Expected mono or multi-channel PCM array for playback")
        if len(samples) == 0:
            raise AudioError("Cannot play empty audio buffer")

        frames = samples.reshape(len(samples), -1).astype(np.float32, copy=False)
        pos = 0

        def callback(outdata, frame_count, time_info, status):
            nonlocal pos
            if status:
                self._logger.warning("Sounddevice status: %s", status)

            end = pos + frame_count
            chunk = frames[pos:end]

            if len(chunk) < frame_count:
                outdata[: len(chunk)] = chunk
                outdata[len(chunk) :] = 0
                raise sd.CallbackStop()

            outdata[:] = chunk
            pos = end

        with self._lock:
            self._close_stream_locked()
            try:
                stream = sd.OutputStream(
                    channels=frames.shape[1],
                    samplerate=sample_rate_hz,
                    blocksize=self._blocksize,
                    dtype="float32",
                    callback=callback,
                    device=self._output_device_index,
                )
                stream.start()
            except Exception as error:
                raise AudioError(f"Audio playback failed: {error}") from error
            self._stream = stream

    def stop(self) -> None:
        with self._lock:
            self._close_stream_locked()

    def _close_stream_locked(self) -> None:
        stream = self._stream
        self._stream = None
        if stream is None:
            return
        try:
            stream.abort()
            stream.close()
        except Exception as error:
            self._logger.warning("Failed to close audio stream: %s", error)
