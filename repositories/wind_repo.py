import logging
from typing import List, Sequence

from sqlalchemy import Column, Float, Index, Integer, String, UniqueConstraint, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.database import Base
from features.common.models.station_types import Coordinate, Station
from features.wind.models.wind_types import AnnualStatistic
from features.common.exceptions.wind_exceptions import (
    NoStationsError,
    NoWindDataForStationError,
    RepositoryError,
    StationNotFoundError
)

logger = logging.getLogger(__name__)

class StationRecord(Base):
    __tablename__ = "stations"

    id = Column(Integer, primary_key=True)
    station_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, unique=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    last_measured_year = Column(Integer, nullable=False)

    def to_station(self) -> Station:
        return Station(
            station_id=self.station_id,
            name=self.name,
            coordinate=Coordinate(latitude=self.latitude, longitude=self.longitude),
            last_measured_year=self.last_measured_year
        )

class WindStatisticRecord(Base):
    __tablename__ = "wind_statistics"

    id = Column(Integer, primary_key=True)
    station_name = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    speed = Column(Float, nullable=False)

    __table_args__ = (
        UniqueConstraint("station_name", "year", name="uq_wind_station_year"),
        Index("ix_wind_station_year", "station_name", "year"),
    )

class WindStatisticsRepository:
    """Persistent store for stations and their annual wind statistics.

    All methods are blocking; async callers run them in a worker thread.
    Storage failures raise RepositoryError, "no rows matched" conditions
    raise its more specific subclasses.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def insert_stations(self, stations: Sequence[Station]) -> None:
        """Insert the station directory in one transaction."""
        records = [
            StationRecord(
                station_id=s.station_id,
                name=s.name,
                latitude=s.coordinate.latitude,
                longitude=s.coordinate.longitude,
                last_measured_year=s.last_measured_year
            )
            for s in stations
        ]
        self._insert_all(records, "stations")

    def get_stations(self) -> List[Station]:
        """Get all stations in insertion order."""
        try:
            with self.session_factory() as session:
                records = session.scalars(
                    select(StationRecord).order_by(StationRecord.id)
                ).all()
                stations = [r.to_station() for r in records]
        except SQLAlchemyError as e:
            raise RepositoryError(f"failed to get stations: {str(e)}") from e

        if not stations:
            raise NoStationsError("there are no stations in the database")
        return stations

    def get_station(self, name: str) -> Station:
        """Get a station by its name."""
        try:
            with self.session_factory() as session:
                record = session.scalars(
                    select(StationRecord).where(StationRecord.name == name)
                ).first()
                station = record.to_station() if record else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"failed to get station {name}: {str(e)}") from e

        if station is None:
            raise StationNotFoundError(f"station with the name {name} does not exist")
        return station

    def insert_annual_statistics(self, statistics: Sequence[AnnualStatistic]) -> None:
        """Insert annual statistics of a station in one transaction."""
        records = [
            WindStatisticRecord(
                station_name=s.station_name,
                year=s.year,
                speed=s.speed
            )
            for s in statistics
        ]
        self._insert_all(records, "annual statistics")

    def get_station_wind_statistics(self, station_name: str, years: int) -> List[AnnualStatistic]:
        """Get statistics of the last `years` years with data, newest first."""
        try:
            with self.session_factory() as session:
                records = session.scalars(
                    select(WindStatisticRecord)
                    .where(WindStatisticRecord.station_name == station_name)
                    .order_by(WindStatisticRecord.year.desc())
                    .limit(years)
                ).all()
                statistics = [AnnualStatistic.model_validate(r) for r in records]
        except SQLAlchemyError as e:
            raise RepositoryError(f"failed to get wind statistics of {station_name}: {str(e)}") from e

        if not statistics:
            raise NoWindDataForStationError(f"there is no wind data for the station {station_name}")
        return statistics

    def statistics_exist(self, station_name: str) -> bool:
        """Check whether any statistics are stored for the station."""
        try:
            with self.session_factory() as session:
                found = session.scalars(
                    select(WindStatisticRecord.id)
                    .where(WindStatisticRecord.station_name == station_name)
                    .limit(1)
                ).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"failed to check statistics of {station_name}: {str(e)}") from e
        return found is not None

    def _insert_all(self, records: list, what: str) -> None:
        try:
            with self.session_factory() as session:
                session.add_all(records)
                session.flush()
                inserted = sum(1 for r in records if r.id is not None)
                if inserted != len(records):
                    session.rollback()
                    raise RepositoryError(f"not all {what} were inserted: {inserted}/{len(records)}")
                session.commit()
        except SQLAlchemyError as e:
            raise RepositoryError(f"failed to insert {what}: {str(e)}") from e

        logger.info(f"💾 Inserted {len(records)} {what}")
