import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import logging

from core.config import settings
from core.database import create_db_engine, create_session_factory, init_db
from core.logging_config import setup_logging
from features.stations.services.station_directory_client import StationDirectoryClient
from features.stations.services.station_service import StationService
from repositories.wind_repo import WindStatisticsRepository

logger = logging.getLogger(__name__)

async def load_stations() -> int:
    """Load the station directory into the database unless already present."""
    engine = create_db_engine(settings.database_url)
    init_db(engine)

    directory_client = StationDirectoryClient()
    service = StationService(
        repo=WindStatisticsRepository(create_session_factory(engine)),
        directory_client=directory_client
    )
    try:
        stations = await service.list_stations()
    finally:
        await directory_client.close()
        engine.dispose()

    return len(stations)

def main():
    setup_logging(settings.log_level)
    count = asyncio.run(load_stations())
    logger.info(f"✅ {count} stations available")

if __name__ == '__main__':
    main()
