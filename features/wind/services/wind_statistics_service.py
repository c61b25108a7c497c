import asyncio
import logging
from typing import Dict, List

from features.wind.models.wind_types import AnnualStatistic, WindRequest
from features.common.models.station_types import Station
from features.common.exceptions.wind_exceptions import (
    ArchiveNotFoundError,
    NoStatisticsInPeriodError
)
from features.geocoding.services.geocoding_client import GeocodingClient
from features.stations.services.station_service import StationService
from features.wind.services.archive_client import ArchiveClient
from features.wind.services.archive_locator import ArchiveLocator
from features.wind.services.hourly_parser import parse_hourly_samples
from features.wind.services.annual_aggregator import aggregate_annual_statistics
from repositories.wind_repo import WindStatisticsRepository

logger = logging.getLogger(__name__)

class WindStatisticsService:
    """Serves annual wind statistics, building them from archives on a cache miss."""

    def __init__(
        self,
        repo: WindStatisticsRepository,
        geocoding_client: GeocodingClient,
        station_service: StationService,
        archive_locator: ArchiveLocator,
        archive_client: ArchiveClient
    ):
        self.repo = repo
        self.geocoding_client = geocoding_client
        self.station_service = station_service
        self.archive_locator = archive_locator
        self.archive_client = archive_client
        self._build_locks: Dict[str, asyncio.Lock] = {}
        self._build_lock_users: Dict[str, int] = {}

    async def get_wind_statistics(self, request: WindRequest) -> List[AnnualStatistic]:
        """Get annual statistics of the nearest covering station, oldest year first."""
        point = await self.geocoding_client.resolve(request.city)
        candidates = await self.station_service.find_candidate_stations(point, request.years)

        station = None
        for candidate in candidates:
            try:
                await self.ensure_statistics(candidate)
            except ArchiveNotFoundError as e:
                logger.info(f"⏭️ No archive for {candidate.name} ({candidate.station_id}): {str(e)}")
                continue
            station = candidate
            break

        if station is None:
            raise NoStatisticsInPeriodError()

        statistics = await asyncio.to_thread(
            self.repo.get_station_wind_statistics, station.name, request.years
        )
        return sorted(statistics, key=lambda s: s.year)

    async def ensure_statistics(self, station: Station) -> None:
        """Make sure annual statistics of the station are stored."""
        if await asyncio.to_thread(self.repo.statistics_exist, station.name):
            return

        station_id = station.station_id
        lock = self._build_locks.setdefault(station_id, asyncio.Lock())
        self._build_lock_users[station_id] = self._build_lock_users.get(station_id, 0) + 1
        try:
            async with lock:
                # A concurrent request may have built them while we waited
                if await asyncio.to_thread(self.repo.statistics_exist, station.name):
                    return

                statistics = await self.build_statistics(station)
                await asyncio.to_thread(self.repo.insert_annual_statistics, statistics)
                logger.info(f"✅ Stored {len(statistics)} annual statistics for {station.name}")
        finally:
            self._build_lock_users[station_id] -= 1
            if not self._build_lock_users[station_id]:
                del self._build_lock_users[station_id]
                del self._build_locks[station_id]

    async def build_statistics(self, station: Station) -> List[AnnualStatistic]:
        """Download, parse and aggregate the hourly archive of a station."""
        logger.info(f"🌬️ Building wind statistics for {station.name} ({station.station_id})")
        index_html = await self.archive_client.fetch_index()
        file_name = self.archive_locator.locate(station.station_id, index_html)

        product_file = await self.archive_client.fetch_product_file(file_name)
        with product_file:
            samples = await asyncio.to_thread(parse_hourly_samples, product_file)

        statistics = aggregate_annual_statistics(station.name, samples)
        if not statistics:
            raise ArchiveNotFoundError(f"archive {file_name} holds no wind measurements")
        return statistics
