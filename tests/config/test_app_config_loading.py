import os
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_reads_all_sections(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [timer]
                    work_minutes = 50
                    break_minutes = 10
                    long_break_minutes = 30
                    intervals_until_long_break = 3
                    sound_volume = 0.4
                    autostart = true

                    [audio]
                    sounds_dir = "assets/cues"
                    output_device = 2

                    [notifications]
                    backend = "Notify-Send"
                    sound = "Glass"

                    [screen_lock]
                    enabled = false
                    poll_interval_seconds = 1.5

                    [logging]
                    level = "debug"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(50.0, app_config.timer.work_minutes)
            self.assertEqual(10.0, app_config.timer.break_minutes)
            self.assertEqual(30.0, app_config.timer.long_break_minutes)
            self.assertEqual(3, app_config.timer.intervals_until_long_break)
            self.assertEqual(0.4, app_config.timer.sound_volume)
            self.assertTrue(app_config.timer.autostart)
            self.assertEqual(
                str((root / "assets/cues").resolve()),
                app_config.audio.sounds_dir,
            )
            self.assertEqual(2, app_config.audio.output_device)
            self.assertEqual("notify-send", app_config.notifications.backend)
            self.assertEqual("Glass", app_config.notifications.sound)
            self.assertFalse(app_config.screen_lock.enabled)
            self.assertEqual(1.5, app_config.screen_lock.poll_interval_seconds)
            self.assertEqual("DEBUG", app_config.logging.level)

    def test_missing_default_file_uses_builtin_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch.dict(os.environ, {}, clear=False):
                os.environ.pop("APP_CONFIG_FILE", None)
                with patch("app_config.Path.cwd", return_value=Path(temp_dir)):
                    app_config = load_app_config()

            self.assertEqual("", app_config.source_file)
            self.assertEqual(25.0, app_config.timer.work_minutes)
            self.assertEqual(4, app_config.timer.intervals_until_long_break)
            self.assertEqual(0.75, app_config.timer.sound_volume)
            self.assertFalse(app_config.timer.autostart)
            self.assertTrue(app_config.audio.enabled)
            self.assertEqual(
                str((Path(temp_dir) / "sounds").resolve()),
                app_config.audio.sounds_dir,
            )
            self.assertIsNone(app_config.audio.output_device)
            self.assertEqual("auto", app_config.notifications.backend)
            self.assertTrue(app_config.screen_lock.enabled)
            self.assertEqual("INFO", app_config.logging.level)

    def test_missing_explicit_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaisesRegex(AppConfigurationError, "not found"):
                load_app_config(str(Path(temp_dir) / "absent.toml"))

    def test_env_var_selects_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "custom.toml"
            _write_text(config_path, "[timer]\nwork_minutes = 45\n")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(config_path)}):
                self.assertEqual(config_path, resolve_config_path())
                app_config = load_app_config()

            self.assertEqual(45.0, app_config.timer.work_minutes)

    def test_invalid_values_raise_configuration_error(self) -> None:
        cases = {
            "[timer]\nwork_minutes = true\n": "timer.work_minutes",
            "[timer]\nintervals_until_long_break = \"four\"\n": "intervals_until_long_break",
            "[notifications]\nbackend = \"growl\"\n": "notifications.backend",
            "[screen_lock]\npoll_interval_seconds = 0\n": "poll_interval_seconds",
            "[logging]\nlevel = \"chatty\"\n": "logging.level",
            "timer = 5\n": r"\[timer\]",
            "[timer\n": "Failed to parse",
            "[timer]\nwork_minutes = nan\n": "timer.work_minutes must be a finite number",
            "[timer]\nsound_volume = inf\n": "timer.sound_volume must be a finite number",
            "[timer]\nbreak_minutes = \"-inf\"\n": "timer.break_minutes must be a finite number",
            "[screen_lock]\npoll_interval_seconds = inf\n": "finite number",
        }
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            for content, message in cases.items():
                with self.subTest(content=content):
                    _write_text(config_path, content)
                    with self.assertRaisesRegex(AppConfigurationError, message):
                        load_app_config(str(config_path))

    def test_directory_path_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaisesRegex(AppConfigurationError, "not a file"):
                load_app_config(temp_dir)


if __name__ == "__main__":
    unittest.main()
