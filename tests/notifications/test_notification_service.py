import threading
import unittest

from notifications import NotificationService


class _RecordingBackend:
    def __init__(self, fail: bool = False):
        self.sent: list[tuple[str, str]] = []
        self.delivered = threading.Event()
        self._fail = fail

    def send(self, title: str, body: str) -> None:
        self.sent.append((title, body))
        self.delivered.set()
        if self._fail:
            raise RuntimeError("backend down")


class NotificationServiceTests(unittest.TestCase):
    def test_notify_delivers_on_worker_thread(self) -> None:
        backend = _RecordingBackend()
        service = NotificationService(backend)

        service.notify("Break Time!", "Time for a 5 minute break.")
        service.shutdown(wait=True)

        self.assertEqual([("Break Time!", "Time for a 5 minute break.")], backend.sent)

    def test_backend_failure_is_logged_not_raised(self) -> None:
        backend = _RecordingBackend(fail=True)
        service = NotificationService(backend)

        with self.assertLogs("notifications", level="ERROR") as logs:
            service.notify("title", "body")
            service.shutdown(wait=True)

        self.assertIn("backend down", logs.output[0])

    def test_notify_after_shutdown_is_dropped(self) -> None:
        backend = _RecordingBackend()
        service = NotificationService(backend)
        service.shutdown(wait=True)

        service.notify("title", "body")

        self.assertFalse(backend.delivered.wait(timeout=0.1))
        self.assertEqual([], backend.sent)


if __name__ == "__main__":
    unittest.main()
