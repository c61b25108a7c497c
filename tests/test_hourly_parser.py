"""Tests for product file parsing."""

from datetime import datetime
from unittest import TestCase

from features.wind.services.hourly_parser import parse_hourly_sample, parse_hourly_samples

HEADER = "STATIONS_ID;MESS_DATUM;   QN_3;    F;    D;eor"

class ParseHourlySampleTests(TestCase):

    def test_parses_date_and_speed(self):
        result = parse_hourly_sample("          3;2010123123;    3;   4.0;  270;eor")

        self.assertEqual(result.end_date, datetime(2010, 12, 31, 23))
        self.assertEqual(result.speed, 4.0)

    def test_parses_unknown_speed(self):
        result = parse_hourly_sample("3;2011010100;    3; -999;  -999;eor")

        self.assertEqual(result.speed, -999.0)

    def test_invalid_date_raises(self):
        with self.assertRaises(ValueError):
            parse_hourly_sample("3;20101331xx;3;4.0;270;eor")

    def test_invalid_speed_raises(self):
        with self.assertRaises(ValueError):
            parse_hourly_sample("3;2010123123;3;fast;270;eor")

    def test_too_few_fields_raises(self):
        with self.assertRaises(ValueError):
            parse_hourly_sample("3;2010123123")

class ParseHourlySamplesTests(TestCase):

    def test_drops_header_and_keeps_order(self):
        lines = [
            HEADER,
            "3;2010123123;3;4.0;270;eor",
            "3;2011010100;3;6.0;270;eor",
            "3;2011060112;3;2.0;270;eor",
        ]

        result = parse_hourly_samples(lines)

        self.assertEqual([s.speed for s in result], [4.0, 6.0, 2.0])
        self.assertEqual(result[0].end_date, datetime(2010, 12, 31, 23))

    def test_malformed_lines_are_skipped(self):
        lines = [
            HEADER,
            "3;2010123123;3;4.0;270;eor",
            "garbage",
            "3;notadate;3;4.0;270;eor",
            "3;2010123123;3;n/a;270;eor",
            "",
            "3;2011010100;3;6.0;270;eor",
        ]

        with self.assertLogs("features.wind.services.hourly_parser", level="WARNING") as logs:
            result = parse_hourly_samples(lines)

        self.assertEqual([s.speed for s in result], [4.0, 6.0])
        self.assertEqual(len([m for m in logs.output if "Skipping" in m]), 3)

    def test_header_only(self):
        self.assertEqual(parse_hourly_samples([HEADER]), [])
