import logging
import unittest
from typing import Any

from pomodoro import PomodoroSnapshot, TimerConfig
from runtime.ui import RuntimeUIPublisher


class _RecordingPresenter:
    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def publish(self, event_type: str, **payload: Any) -> None:
        self.events.append((event_type, payload))


class _FailingPresenter:
    def publish(self, event_type: str, **payload: Any) -> None:
        raise RuntimeError("window closed")


def _snapshot() -> PomodoroSnapshot:
    return PomodoroSnapshot(
        phase="break",
        time_remaining=299,
        is_running=True,
        completed_intervals=1,
        config=TimerConfig(),
    )


class RuntimeUIPublisherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.presenter = _RecordingPresenter()
        self.publisher = RuntimeUIPublisher(
            [self.presenter],
            logger=logging.getLogger("test.runtime.ui"),
        )

    def test_unknown_event_type_is_dropped(self) -> None:
        with self.assertLogs("test.runtime.ui", level="WARNING"):
            self.publisher.publish("confetti", amount=3)

        self.assertEqual([], self.presenter.events)

    def test_pomodoro_update_payload(self) -> None:
        self.publisher.publish_pomodoro_update(_snapshot(), action="tick")

        event_type, payload = self.presenter.events[0]
        self.assertEqual("pomodoro", event_type)
        self.assertEqual("Break 04:59 [1/4]", payload["title"])
        self.assertEqual(299, payload["time_remaining"])
        self.assertNotIn("accepted", payload)

    def test_failing_presenter_does_not_block_others(self) -> None:
        publisher = RuntimeUIPublisher(
            [_FailingPresenter(), self.presenter],
            logger=logging.getLogger("test.runtime.ui"),
        )

        with self.assertLogs("test.runtime.ui", level="ERROR"):
            publisher.publish_command_rejected("pause", "not_running")

        self.assertEqual(
            [("command_rejected", {"action": "pause", "reason": "not_running"})],
            self.presenter.events,
        )


if __name__ == "__main__":
    unittest.main()
