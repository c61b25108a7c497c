import io
import asyncio
import logging
import zipfile
import aiohttp
from typing import Optional, TextIO

from features.wind.services.archive_locator import ArchivePatterns
from features.common.exceptions.wind_exceptions import (
    ProductFileNotFoundError,
    UpstreamServiceError
)
from core.config import settings

logger = logging.getLogger(__name__)

class ArchiveClient:
    """Downloads the hourly wind archive index and station archives."""

    def __init__(
        self,
        patterns: ArchivePatterns,
        base_url: str = settings.hourly_wind_historical_data_url,
        timeout: float = settings.request_timeout
    ):
        self.patterns = patterns
        self.base_url = base_url
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

    async def _download(self, url: str) -> bytes:
        session = await self._init_session()
        try:
            async with session.get(url) as response:
                response.raise_for_status()
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error downloading {url}: {str(e)}")
            raise UpstreamServiceError(f"failed to get wind data from source: {str(e)}") from e

    async def fetch_index(self) -> str:
        """Get the HTML index page listing all station archives."""
        body = await self._download(self.base_url)
        return body.decode("utf-8", errors="replace")

    async def fetch_product_file(self, file_name: str) -> TextIO:
        """Download a station archive and open its product file."""
        body = await self._download(self.base_url + file_name)
        logger.info(f"📦 Downloaded {file_name} ({len(body)} bytes)")
        return self.open_product_file(body)

    def open_product_file(self, archive: bytes) -> TextIO:
        """Return a text handle to the product file inside a zip archive."""
        try:
            zip_file = zipfile.ZipFile(io.BytesIO(archive))
        except zipfile.BadZipFile as e:
            raise UpstreamServiceError(f"failed to open archive: {str(e)}") from e

        for name in zip_file.namelist():
            if self.patterns.product_file.search(name):
                return io.TextIOWrapper(zip_file.open(name), encoding="latin-1")

        zip_file.close()
        raise ProductFileNotFoundError("there is no product file")
