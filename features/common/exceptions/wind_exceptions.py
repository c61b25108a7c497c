class WindStatisticsError(Exception):
    """Base exception for wind statistics errors."""
    pass

class CityNotFoundError(WindStatisticsError):
    """Raised when the geocoder cannot resolve a city."""

    def __init__(self, message: str = "city not found, please, check city name"):
        super().__init__(message)

class NoStatisticsInPeriodError(WindStatisticsError):
    """Raised when no station near the city has data for the requested period."""

    def __init__(
        self,
        message: str = "unfortunately, there is no statistics available for the nearest weather station for this period"
    ):
        super().__init__(message)

class ArchiveNotFoundError(WindStatisticsError):
    """Raised when a station has no downloadable measurement archive."""
    pass

class ProductFileNotFoundError(ArchiveNotFoundError):
    """Raised when an archive holds no product file."""
    pass

class UpstreamServiceError(WindStatisticsError):
    """Raised when an external source fails or returns undecodable data."""
    pass

class RepositoryError(WindStatisticsError):
    """Raised when the persistent store fails."""
    pass

class NoStationsError(RepositoryError):
    """Raised when the station directory has not been loaded yet."""
    pass

class StationNotFoundError(RepositoryError):
    """Raised when no station has the given name."""
    pass

class NoWindDataForStationError(RepositoryError):
    """Raised when a station has no stored annual statistics."""
    pass
