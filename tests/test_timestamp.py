from datetime import datetime, timedelta, timezone
from unittest import TestCase

from activity_readme.timestamp import format_timestamp, parse_timezone_offset, shifted_now


class TimezoneOffsetTests(TestCase):
    def test_parse(self):
        self.assertEqual(parse_timezone_offset("+05:30"), 330)
        self.assertEqual(parse_timezone_offset("-05:30"), -330)
        self.assertEqual(parse_timezone_offset("00:00"), 0)
        self.assertEqual(parse_timezone_offset("GMT+01:00"), 60)
        self.assertEqual(parse_timezone_offset(" +9:45 "), 585)

    def test_invalid(self):
        for value in ["", "5", "+05", "+05:60", "UTC+01:00", "+aa:bb"]:
            with self.assertRaises(ValueError, msg=value):
                parse_timezone_offset(value)

    def test_offset_is_subtracted_from_utc(self):
        instant = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)

        self.assertEqual(shifted_now("+05:30", instant), datetime(2024, 3, 10, 6, 30, 0))
        self.assertEqual(shifted_now("-02:00", instant), datetime(2024, 3, 10, 14, 0, 0))

    def test_aware_non_utc_input(self):
        instant = datetime(2024, 3, 10, 15, 0, 0, tzinfo=timezone(timedelta(hours=3)))
        self.assertEqual(shifted_now("+00:00", instant), datetime(2024, 3, 10, 12, 0, 0))


class FormatTimestampTests(TestCase):
    def test_all_tokens(self):
        moment = datetime(2024, 3, 5, 14, 7, 9)

        result = format_timestamp(moment, "DD/MM/YYYY YY HH hh:mm:ss AA aa")

        self.assertEqual(result, "05/03/2024 24 14 02:07:09 PM pm")

    def test_midnight_is_00_in_12_hour_clock(self):
        result = format_timestamp(datetime(2024, 1, 1, 0, 5, 0), "hh:mm aa")

        self.assertEqual(result, "00:05 am")

    def test_noon(self):
        self.assertEqual(format_timestamp(datetime(2024, 1, 1, 12, 0, 0), "hh AA"), "12 AM")

    def test_substituted_values_are_not_reread(self):
        # "pm" followed by "m" must not turn into a minute token
        result = format_timestamp(datetime(2024, 1, 1, 13, 45, 0), "aam")

        self.assertEqual(result, "pmm")

    def test_literal_text_kept(self):
        self.assertEqual(format_timestamp(datetime(2024, 1, 1), "Last Updated: YYYY"), "Last Updated: 2024")

    def test_shifted_round_trip(self):
        instant = datetime(2024, 6, 1, 5, 10, 20, tzinfo=timezone.utc)

        moment = shifted_now("+05:30", instant)
        result = format_timestamp(moment, "DD-MM-YYYY HH:mm:ss hh AA")

        # 05:10:20 UTC minus 5h30 is 23:40:20 on the previous day
        self.assertEqual(result, "31-05-2024 23:40:20 11 PM")
