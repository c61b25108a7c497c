import asyncio
import logging
import aiohttp
from typing import Iterable, List, Optional

from features.common.models.station_types import Station, Coordinate
from features.common.exceptions.wind_exceptions import UpstreamServiceError
from core.config import settings

logger = logging.getLogger(__name__)

def parse_station_line(line: str) -> Station:
    """Parse one line of the station description file.

    Columns: Stations_id von_datum bis_datum Stationshoehe geoBreite
    geoLaenge Stationsname Bundesland. The station name can have more than
    one word, so it is everything between geoLaenge and Bundesland.
    """
    parts = line.split()
    if len(parts) < 8:
        raise ValueError(f"not enough columns in station line: {line!r}")

    return Station(
        station_id=parts[0],
        name=" ".join(parts[6:-1]),
        coordinate=Coordinate(
            latitude=float(parts[4]),
            longitude=float(parts[5])
        ),
        last_measured_year=int(parts[2][:4])
    )

def parse_station_lines(lines: Iterable[str], header_lines: int = 2) -> List[Station]:
    """Parse station file lines, skipping headers and malformed lines."""
    stations = []
    for number, line in enumerate(lines):
        if number < header_lines or not line.strip():
            continue
        try:
            stations.append(parse_station_line(line))
        except ValueError as e:
            logger.warning(f"Skipping station line {number + 1}: {str(e)}")
    return stations

class StationDirectoryClient:
    """Downloads the station description file."""

    def __init__(
        self,
        url: str = settings.stations_info_url,
        encoding: str = settings.stations_encoding,
        header_lines: int = settings.stations_header_lines,
        timeout: float = settings.request_timeout
    ):
        self.url = url
        self.encoding = encoding
        self.header_lines = header_lines
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def fetch_stations(self) -> List[Station]:
        """Get all stations listed in the description file."""
        session = await self._init_session()
        try:
            async with session.get(self.url) as response:
                response.raise_for_status()
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error fetching station directory: {str(e)}")
            raise UpstreamServiceError(f"failed to get stations info from source: {str(e)}") from e

        try:
            text = body.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise UpstreamServiceError(f"failed to decode stations info: {str(e)}") from e

        stations = parse_station_lines(text.splitlines(), self.header_lines)
        logger.info(f"📋 Parsed {len(stations)} stations from directory")
        return stations
