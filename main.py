from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import asyncio
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from core.config import settings
from core.database import create_db_engine, create_session_factory, init_db
from core.logging_config import setup_logging

# Feature routes
from features.wind.routes.wind_routes import router as wind_router

# Services and clients
from features.geocoding.services.geocoding_client import GeocodingClient
from features.stations.services.station_directory_client import StationDirectoryClient
from features.stations.services.station_service import StationService
from features.wind.services.archive_client import ArchiveClient
from features.wind.services.archive_locator import ArchiveLocator, ArchivePatterns
from features.wind.services.wind_statistics_service import WindStatisticsService
from repositories.wind_repo import WindStatisticsRepository

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        logger.info("🚀 Starting Wind Statistics API...")

        engine = create_db_engine(settings.database_url)
        await asyncio.to_thread(init_db, engine)
        logger.info("💾 Database ready")

        repo = WindStatisticsRepository(create_session_factory(engine))
        patterns = ArchivePatterns.from_settings()

        geocoding_client = GeocodingClient()
        directory_client = StationDirectoryClient()
        archive_client = ArchiveClient(patterns=patterns)

        station_service = StationService(repo=repo, directory_client=directory_client)

        # Store services in app state
        app.state.engine = engine
        app.state.clients = [geocoding_client, directory_client, archive_client]
        app.state.station_service = station_service
        app.state.wind_statistics_service = WindStatisticsService(
            repo=repo,
            geocoding_client=geocoding_client,
            station_service=station_service,
            archive_locator=ArchiveLocator(patterns),
            archive_client=archive_client
        )

        logger.info("✨ API startup complete - ready to serve requests")
        yield

    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise
    finally:
        logger.info("🔄 Shutting down API...")
        for client in getattr(app.state, "clients", []):
            await client.close()
        if hasattr(app.state, "engine"):
            app.state.engine.dispose()
        logger.info("👋 API shutdown complete")

app = FastAPI(
    title="Wind Statistics API",
    description="Annual average wind speed of the nearest weather station",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(wind_router)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "time": datetime.now().isoformat()
    }

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 8080))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
        workers=1
    )
