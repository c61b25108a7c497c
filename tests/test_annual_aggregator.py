"""Tests for the yearly wind speed aggregation."""

from datetime import datetime
from unittest import TestCase

from features.wind.models.wind_types import HourlySample
from features.wind.services.annual_aggregator import aggregate_annual_statistics

def sample(year, month, day, hour, speed):
    return HourlySample(end_date=datetime(year, month, day, hour), speed=speed)

class AggregateAnnualStatisticsTests(TestCase):

    def test_empty_input_yields_no_statistics(self):
        self.assertEqual(aggregate_annual_statistics("Aachen", []), [])

    def test_year_boundary_sample_opens_new_year(self):
        samples = [
            sample(2010, 12, 31, 23, 4.0),
            sample(2011, 1, 1, 0, 6.0),
            sample(2011, 6, 1, 12, 2.0),
        ]

        result = aggregate_annual_statistics("Aachen", samples)

        self.assertEqual([(s.year, s.speed) for s in result], [(2010, 4.0), (2011, 4.0)])
        self.assertTrue(all(s.station_name == "Aachen" for s in result))

    def test_mean_per_year(self):
        samples = [
            sample(2000, 1, 1, 1, 1.0),
            sample(2000, 5, 1, 1, 2.0),
            sample(2000, 9, 1, 1, 6.0),
            sample(2001, 1, 1, 1, 5.0),
            sample(2002, 3, 1, 1, 1.5),
            sample(2002, 4, 1, 1, 2.5),
        ]

        result = aggregate_annual_statistics("Essen", samples)

        self.assertEqual([s.year for s in result], [2000, 2001, 2002])
        self.assertAlmostEqual(result[0].speed, 3.0)
        self.assertAlmostEqual(result[1].speed, 5.0)
        self.assertAlmostEqual(result[2].speed, 2.0)

    def test_unknown_speeds_are_ignored(self):
        samples = [
            sample(2005, 1, 1, 1, -999),
            sample(2005, 1, 1, 2, 3.0),
            sample(2005, 1, 1, 3, -999),
            sample(2005, 1, 1, 4, 5.0),
        ]

        result = aggregate_annual_statistics("Hamburg", samples)

        self.assertEqual(len(result), 1)
        self.assertAlmostEqual(result[0].speed, 4.0)

    def test_year_with_only_unknown_speeds_is_skipped(self):
        samples = [
            sample(2005, 6, 1, 1, 3.0),
            sample(2006, 6, 1, 1, -999),
            sample(2006, 7, 1, 1, -999),
            sample(2007, 6, 1, 1, 1.0),
        ]

        result = aggregate_annual_statistics("Bremen", samples)

        self.assertEqual([(s.year, s.speed) for s in result], [(2005, 3.0), (2007, 1.0)])

    def test_only_unknown_speeds_yields_nothing(self):
        samples = [sample(2005, 6, 1, 1, -999), sample(2006, 6, 1, 1, -999)]

        self.assertEqual(aggregate_annual_statistics("Bremen", samples), [])

    def test_leading_unknown_year_does_not_emit(self):
        samples = [sample(1999, 12, 31, 23, -999), sample(2000, 1, 1, 0, 2.0)]

        result = aggregate_annual_statistics("Kiel", samples)

        self.assertEqual([(s.year, s.speed) for s in result], [(2000, 2.0)])
