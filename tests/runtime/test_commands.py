import unittest

from runtime.commands import CommandError, TimerCommandEvent, parse_command


class ParseCommandTests(unittest.TestCase):
    def test_simple_commands_and_aliases(self) -> None:
        self.assertEqual(TimerCommandEvent("start"), parse_command("start"))
        self.assertEqual(TimerCommandEvent("start"), parse_command("  S \n"))
        self.assertEqual(TimerCommandEvent("pause"), parse_command("p"))
        self.assertEqual(TimerCommandEvent("toggle"), parse_command("t"))
        self.assertEqual(TimerCommandEvent("reset"), parse_command("r"))
        self.assertEqual(TimerCommandEvent("quit"), parse_command("exit"))
        self.assertEqual(TimerCommandEvent("status"), parse_command("?"))

    def test_value_commands_parse_numbers(self) -> None:
        self.assertEqual(TimerCommandEvent("work", 50.0), parse_command("work 50"))
        self.assertEqual(
            TimerCommandEvent("long_break", 20.0),
            parse_command("long-break 20"),
        )
        self.assertEqual(
            TimerCommandEvent("long_break", 30.0),
            parse_command("longbreak 30"),
        )
        self.assertEqual(TimerCommandEvent("volume", 60.0), parse_command("volume 60%"))
        self.assertEqual(TimerCommandEvent("break", 2.5), parse_command("break 2.5"))

    def test_blank_line_is_ignored(self) -> None:
        self.assertIsNone(parse_command(""))
        self.assertIsNone(parse_command("   \n"))

    def test_invalid_input_raises_command_error(self) -> None:
        for line in ("snooze", "start now", "work", "work ten", "volume 1 2"):
            with self.subTest(line=line):
                with self.assertRaises(CommandError):
                    parse_command(line)

    def test_non_finite_values_are_rejected(self) -> None:
        for line in ("work inf", "break -inf", "volume nan%", "intervals NaN", "work infinity"):
            with self.subTest(line=line):
                with self.assertRaises(CommandError):
                    parse_command(line)


if __name__ == "__main__":
    unittest.main()
