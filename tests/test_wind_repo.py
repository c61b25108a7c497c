"""Tests for the SQLAlchemy statistics repository."""

from unittest import TestCase

from core.database import create_db_engine, create_session_factory, init_db
from features.common.exceptions.wind_exceptions import (
    NoStationsError,
    NoWindDataForStationError,
    RepositoryError,
    StationNotFoundError,
)
from features.wind.models.wind_types import AnnualStatistic
from repositories.wind_repo import WindStatisticsRepository
from tests.helpers import make_station

class WindStatisticsRepositoryTests(TestCase):

    def setUp(self):
        self.engine = create_db_engine("sqlite:///:memory:")
        init_db(self.engine)
        self.repo = WindStatisticsRepository(create_session_factory(self.engine))

    def tearDown(self):
        self.engine.dispose()

    def test_get_stations_when_empty(self):
        with self.assertRaises(NoStationsError):
            self.repo.get_stations()

    def test_insert_and_get_stations_in_order(self):
        stations = [
            make_station("00003", "Aachen", 50.7827, 6.0941, 2011),
            make_station("01048", "Dresden Klotzsche", 51.1278, 13.7543, 2024),
        ]

        self.repo.insert_stations(stations)

        self.assertEqual(self.repo.get_stations(), stations)
        self.assertEqual(self.repo.get_station("Dresden Klotzsche").station_id, "01048")

    def test_get_unknown_station(self):
        with self.assertRaises(StationNotFoundError):
            self.repo.get_station("Atlantis")

    def test_duplicate_station_names_fail_whole_batch(self):
        stations = [
            make_station("00003", "Aachen", 50.7827, 6.0941),
            make_station("00004", "Aachen", 50.7, 6.1),
        ]

        with self.assertRaises(RepositoryError):
            self.repo.insert_stations(stations)

        with self.assertRaises(NoStationsError):
            self.repo.get_stations()

    def test_statistics_newest_years_first_limited(self):
        self.repo.insert_annual_statistics([
            AnnualStatistic(station_name="Aachen", year=year, speed=float(year - 2000))
            for year in range(2005, 2011)
        ])

        result = self.repo.get_station_wind_statistics("Aachen", 3)

        self.assertEqual([s.year for s in result], [2010, 2009, 2008])
        self.assertEqual(result[0].speed, 10.0)

    def test_statistics_missing(self):
        with self.assertRaises(NoWindDataForStationError):
            self.repo.get_station_wind_statistics("Aachen", 3)

    def test_statistics_exist(self):
        self.assertFalse(self.repo.statistics_exist("Aachen"))

        self.repo.insert_annual_statistics([AnnualStatistic(station_name="Aachen", year=2010, speed=3.2)])

        self.assertTrue(self.repo.statistics_exist("Aachen"))
        self.assertFalse(self.repo.statistics_exist("Essen"))

    def test_second_insert_for_same_years_is_rejected(self):
        statistic = AnnualStatistic(station_name="Aachen", year=2010, speed=3.2)
        self.repo.insert_annual_statistics([statistic])

        with self.assertRaises(RepositoryError):
            self.repo.insert_annual_statistics([statistic])

        self.assertEqual(len(self.repo.get_station_wind_statistics("Aachen", 10)), 1)

    def test_largest_accepted_years_limit(self):
        self.repo.insert_annual_statistics([AnnualStatistic(station_name="Aachen", year=2010, speed=3.2)])

        result = self.repo.get_station_wind_statistics("Aachen", 2**31 - 1)

        self.assertEqual([s.year for s in result], [2010])
