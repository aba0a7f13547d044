import sys
import types
import unittest
from unittest.mock import patch

import numpy as np


class _CallbackStop(Exception):
    pass


class _FakeStream:
    instances: list["_FakeStream"] = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.aborted = False
        self.closed = False
        _FakeStream.instances.append(self)

    def start(self) -> None:
        self.started = True

    def abort(self) -> None:
        self.aborted = True

    def close(self) -> None:
        self.closed = True


def _build_sounddevice_stub():
    module = types.ModuleType("sounddevice")
    module.CallbackStop = _CallbackStop
    module.OutputStream = _FakeStream
    return module


_SD_STUB = _build_sounddevice_stub()

with patch.dict(sys.modules, {"sounddevice": _SD_STUB}):
    import audio.output as audio_output
    from audio import AudioError


class SoundDeviceAudioOutputTests(unittest.TestCase):
    def setUp(self) -> None:
        _FakeStream.instances.clear()
        patcher = patch.object(audio_output, "sd", _SD_STUB)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_play_opens_stream_for_selected_device(self) -> None:
        output = audio_output.SoundDeviceAudioOutput(output_device_index=3, blocksize=4)

        output.play(np.zeros(10, dtype=np.float32), 22050)

        self.assertEqual(1, len(_FakeStream.instances))
        stream = _FakeStream.instances[0]
        self.assertTrue(stream.started)
        self.assertEqual(3, stream.kwargs["device"])
        self.assertEqual(1, stream.kwargs["channels"])
        self.assertEqual(22050, stream.kwargs["samplerate"])
        self.assertEqual(4, stream.kwargs["blocksize"])

    def test_callback_streams_frames_and_stops_at_end(self) -> None:
        output = audio_output.SoundDeviceAudioOutput(blocksize=4)
        samples = np.arange(6, dtype=np.float32)
        output.play(samples, 8000)
        callback = _FakeStream.instances[0].kwargs["callback"]

        first = np.empty((4, 1), dtype=np.float32)
        callback(first, 4, None, None)
        second = np.empty((4, 1), dtype=np.float32)
        with self.assertRaises(_CallbackStop):
            callback(second, 4, None, None)

        np.testing.assert_array_equal([[0], [1], [2], [3]], first)
        np.testing.assert_array_equal([[4], [5], [0], [0]], second)

    def test_new_cue_aborts_previous_stream(self) -> None:
        output = audio_output.SoundDeviceAudioOutput()

        output.play(np.ones(4, dtype=np.float32), 8000)
        output.play(np.ones(4, dtype=np.float32), 8000)

        first, second = _FakeStream.instances
        self.assertTrue(first.aborted)
        self.assertTrue(first.closed)
        self.assertFalse(second.closed)

        output.stop()
        self.assertTrue(second.closed)

    def test_empty_buffer_is_rejected(self) -> None:
        output = audio_output.SoundDeviceAudioOutput()
        with self.assertRaises(AudioError):
            output.play(np.zeros(0, dtype=np.float32), 8000)

    def test_stream_failure_is_wrapped(self) -> None:
        output = audio_output.SoundDeviceAudioOutput()
        with patch.object(_SD_STUB, "OutputStream", side_effect=OSError("no device")):
            with self.assertRaisesRegex(AudioError, "no device"):
                output.play(np.ones(4, dtype=np.float32), 8000)


if __name__ == "__main__":
    unittest.main()
