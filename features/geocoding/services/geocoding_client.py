import asyncio
import logging
import aiohttp
from typing import Optional
from aiocache import cached
from pydantic import ValidationError

from features.common.models.station_types import Coordinate
from features.common.exceptions.wind_exceptions import CityNotFoundError, UpstreamServiceError
from features.common.services.cache_config import city_cache_key_builder
from core.config import settings

logger = logging.getLogger(__name__)

class GeocodingClient:
    """Resolves city names to coordinates through the geocoding API."""

    def __init__(
        self,
        base_url: str = settings.geo_api_url,
        access_key: str = settings.geo_api_access_key,
        timeout: float = settings.request_timeout
    ):
        self.base_url = base_url
        self.access_key = access_key
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

    async def resolve(self, city: str) -> Coordinate:
        """Get coordinates of the given city."""
        if not city or not city.strip():
            raise ValueError("city must not be empty")
        return await self._lookup(city)

    @cached(
        alias="default",
        key_builder=city_cache_key_builder
    )
    async def _lookup(self, city: str) -> Coordinate:
        session = await self._init_session()
        params = {
            "access_key": self.access_key,
            "query": city
        }

        try:
            async with session.get(self.base_url, params=params) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error fetching coordinates for {city}: {str(e)}")
            raise UpstreamServiceError(f"failed to get coordinates for the given city: {str(e)}") from e
        except ValueError as e:
            logger.error(f"Error decoding geocoding response for {city}: {str(e)}")
            raise UpstreamServiceError(f"failed to decode response: {str(e)}") from e

        results = data.get("data") if isinstance(data, dict) else None
        if not results:
            raise CityNotFoundError()

        first = results[0]
        if not isinstance(first, dict):
            raise CityNotFoundError()

        latitude = first.get("latitude")
        longitude = first.get("longitude")

        # 0/0 is what the API answers for unknown places
        if latitude is None or longitude is None or (latitude == 0 and longitude == 0):
            raise CityNotFoundError()

        try:
            coordinate = Coordinate(latitude=latitude, longitude=longitude)
        except ValidationError as e:
            raise UpstreamServiceError(f"invalid coordinates for {city}: {str(e)}") from e

        logger.info(f"📍 Resolved {city} to ({coordinate.latitude}, {coordinate.longitude})")
        return coordinate
