import asyncio
import logging
from typing import List, Optional

from features.common.models.station_types import Station, Coordinate
from features.common.exceptions.wind_exceptions import NoStationsError
from features.common.utils.geo import haversine_distance
from features.stations.services.station_directory_client import StationDirectoryClient
from repositories.wind_repo import WindStatisticsRepository
from core.config import settings

logger = logging.getLogger(__name__)

def rank_by_distance(
    point: Coordinate,
    stations: List[Station],
    years: int,
    most_recent_year: int
) -> List[Station]:
    """Order stations nearest first, keeping those that may cover the period.

    A station qualifies when its last measured year falls inside the last
    `years` years. Stations at equal distance keep their directory order.
    """
    by_distance = sorted(stations, key=lambda s: haversine_distance(point, s.coordinate))
    return [s for s in by_distance if s.last_measured_year > most_recent_year - years]

class StationService:
    def __init__(
        self,
        repo: WindStatisticsRepository,
        directory_client: StationDirectoryClient,
        last_measured_year: Optional[int] = settings.last_measured_year
    ):
        self.repo = repo
        self.directory_client = directory_client
        self.last_measured_year = last_measured_year
        self._load_lock = asyncio.Lock()

    async def list_stations(self) -> List[Station]:
        """Get all stations, loading the directory on first use."""
        try:
            return await asyncio.to_thread(self.repo.get_stations)
        except NoStationsError:
            pass

        async with self._load_lock:
            # Another request may have loaded the directory meanwhile
            try:
                return await asyncio.to_thread(self.repo.get_stations)
            except NoStationsError:
                logger.info("📋 No stations stored, loading station directory...")

            stations = await self.directory_client.fetch_stations()
            await asyncio.to_thread(self.repo.insert_stations, stations)

        return await asyncio.to_thread(self.repo.get_stations)

    def most_recent_year(self, stations: List[Station]) -> int:
        if self.last_measured_year is not None:
            return self.last_measured_year
        return max(s.last_measured_year for s in stations)

    async def find_candidate_stations(self, point: Coordinate, years: int) -> List[Station]:
        """Get stations that may cover the period, nearest first."""
        stations = await self.list_stations()
        candidates = rank_by_distance(point, stations, years, self.most_recent_year(stations))
        logger.info(f"Found {len(candidates)} candidate stations for the last {years} years")
        return candidates
