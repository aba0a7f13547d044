import io
import unittest
from queue import Queue

from runtime.commands import TimerCommandEvent
from runtime.console import ConsoleCommandReader, ConsolePresenter


class _TTYStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class ConsolePresenterTests(unittest.TestCase):
    def test_non_interactive_stream_skips_tick_updates(self) -> None:
        stream = io.StringIO()
        presenter = ConsolePresenter(stream)

        presenter.publish("pomodoro", action="start", title="Work 25:00 [0/4]")
        presenter.publish("pomodoro", action="tick", title="Work 24:59 [0/4]")
        presenter.publish("transition", message="Break Time! Time for a 5 minute break.")
        presenter.publish("command_rejected", action="pause", reason="not_running")
        presenter.publish("error", message="boom")

        self.assertEqual(
            "Work 25:00 [0/4]\n"
            "Break Time! Time for a 5 minute break.\n"
            "Command 'pause' ignored: not_running\n"
            "Error: boom\n",
            stream.getvalue(),
        )

    def test_interactive_stream_redraws_title_in_place(self) -> None:
        stream = _TTYStream()
        presenter = ConsolePresenter(stream)

        presenter.publish("pomodoro", action="tick", title="Long Break 10:00 [0/4]")
        presenter.publish("pomodoro", action="tick", title="Work 09:59 [0/4]")
        presenter.publish("transition", message="Time to Focus!")

        self.assertEqual(
            "\rLong Break 10:00 [0/4]"
            "\rWork 09:59 [0/4]      "
            "\nTime to Focus!\n",
            stream.getvalue(),
        )


class ConsoleCommandReaderTests(unittest.TestCase):
    def test_feed_queues_valid_commands_only(self) -> None:
        queue: Queue = Queue()
        reader = ConsoleCommandReader(queue, io.StringIO())

        self.assertTrue(reader.feed("start\n"))
        self.assertFalse(reader.feed("\n"))
        with self.assertLogs("runtime.console", level="WARNING"):
            self.assertFalse(reader.feed("snooze\n"))

        self.assertEqual(TimerCommandEvent("start"), queue.get_nowait())
        self.assertTrue(queue.empty())

    def test_reader_thread_consumes_stream(self) -> None:
        queue: Queue = Queue()
        reader = ConsoleCommandReader(queue, io.StringIO("work 30\nquit\n"))

        reader.start()

        self.assertEqual(TimerCommandEvent("work", 30.0), queue.get(timeout=2.0))
        self.assertEqual(TimerCommandEvent("quit"), queue.get(timeout=2.0))
        reader.stop()


if __name__ == "__main__":
    unittest.main()
