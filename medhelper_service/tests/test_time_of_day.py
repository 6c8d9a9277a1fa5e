import unittest
from datetime import datetime

from medhelper.core.clock import FixedClock
from medhelper.utils.time_of_day import (
    InvalidTimeFormat, TimeOfDay, compare, format_for_display, is_time_string_valid,
    now, parse_display_to_storage, parse_time, time_until,
)

ALL_TIMES = [f"{h:02d}:{m:02d}" for h in range(24) for m in range(60)]


class TestParseTime(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(parse_time("08:05"), TimeOfDay(8, 5))
        self.assertEqual(str(parse_time("23:59")), "23:59")

    def test_rejects_bad_input(self):
        for bad in ["24:00", "12:60", "8:00", "0800", "ab:cd", "", "08:00:00", None]:
            with self.assertRaises(InvalidTimeFormat, msg=repr(bad)):
                parse_time(bad)

    def test_stored_value_must_be_exact(self):
        # no padding, no trailing newline, ASCII digits only
        for bad in [" 08:00 ", "08:00\n", "٠٨:٠٠", "０８:００"]:
            with self.assertRaises(InvalidTimeFormat, msg=repr(bad)):
                parse_time(bad)

    def test_display_input_ascii_digits_only(self):
        self.assertEqual(parse_display_to_storage(" 8:00 ", "24h"), TimeOfDay(8, 0))
        self.assertFalse(is_time_string_valid("٨:٠٠", "24h"))
        self.assertFalse(is_time_string_valid("٨:٠٠ AM", "12h"))

    def test_invalid_format_is_value_error(self):
        self.assertTrue(issubclass(InvalidTimeFormat, ValueError))


class TestDisplay(unittest.TestCase):
    def test_12h(self):
        self.assertEqual(format_for_display("08:00", "12h"), "8:00 AM")
        self.assertEqual(format_for_display("00:05", "12h"), "12:05 AM")
        self.assertEqual(format_for_display("12:30", "12h"), "12:30 PM")
        self.assertEqual(format_for_display("23:59", "12h"), "11:59 PM")

    def test_24h(self):
        self.assertEqual(format_for_display("08:00", "24h"), "08:00")

    def test_display_is_lenient(self):
        self.assertEqual(format_for_display("not a time", "12h"), "not a time")
        self.assertEqual(format_for_display("", "24h"), "")

    def test_parse_12h(self):
        self.assertEqual(parse_display_to_storage("12:00 AM", "12h"), TimeOfDay(0, 0))
        self.assertEqual(parse_display_to_storage("12:00 pm", "12h"), TimeOfDay(12, 0))
        self.assertEqual(parse_display_to_storage("8:15PM", "12h"), TimeOfDay(20, 15))

    def test_parse_24h_accepts_single_digit_hour(self):
        self.assertEqual(parse_display_to_storage("8:00", "24h"), TimeOfDay(8, 0))

    def test_storage_parse_fails_loudly(self):
        for value, fmt in [("13:00 PM", "12h"), ("0:30 AM", "12h"), ("8:00", "12h"),
                           ("24:00", "24h"), ("8 AM", "24h"), ("", "24h")]:
            with self.assertRaises(InvalidTimeFormat, msg=f"{value!r} {fmt}"):
                parse_display_to_storage(value, fmt)
        self.assertFalse(is_time_string_valid("25:00", "24h"))
        self.assertTrue(is_time_string_valid("9:45 AM", "12h"))

    def test_round_trip_every_minute(self):
        for fmt in ("12h", "24h"):
            for t in ALL_TIMES:
                shown = format_for_display(parse_time(t), fmt)
                self.assertEqual(str(parse_display_to_storage(shown, fmt)), t)


class TestCompare(unittest.TestCase):
    def test_basic(self):
        self.assertEqual(compare("08:00", "08:00"), 0)
        self.assertEqual(compare("08:00", "08:01"), -1)
        self.assertEqual(compare("09:00", "08:59"), 1)

    def test_strict_total_order(self):
        for a, b in zip(ALL_TIMES, ALL_TIMES[1:]):
            self.assertEqual(compare(a, b), -1)
            self.assertEqual(compare(b, a), -compare(a, b))
        self.assertEqual(compare(ALL_TIMES[0], ALL_TIMES[-1]), -1)


class TestClockHelpers(unittest.TestCase):
    def test_now_truncates_to_minute(self):
        clock = FixedClock(datetime(2026, 10, 19, 14, 30, 59))
        self.assertEqual(now(clock), TimeOfDay(14, 30))

    def test_time_until(self):
        self.assertEqual(time_until("16:00", "14:30"), (1, 30))
        self.assertEqual(time_until("14:30", "14:30"), (0, 0))
        # already passed today -> tomorrow
        self.assertEqual(time_until("08:00", "14:30"), (17, 30))
