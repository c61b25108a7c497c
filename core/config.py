from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    """Application settings."""

    # Geocoding API (positionstack-compatible: ?access_key=...&query=...)
    geo_api_url: str = "http://api.positionstack.com/v1/forward"
    geo_api_access_key: str = ""
    geocoding_cache_ttl: int = 86400  # 24 hours, city coordinates don't move

    # DWD Climate Data Center sources
    stations_info_url: str = (
        "https://opendata.dwd.de/climate_environment/CDC/observations_germany/"
        "climate/hourly/wind/historical/FF_Stundenwerte_Beschreibung_Stationen.txt"
    )
    hourly_wind_historical_data_url: str = (
        "https://opendata.dwd.de/climate_environment/CDC/observations_germany/"
        "climate/hourly/wind/historical/"
    )
    stations_encoding: str = "iso-8859-15"  # German specific characters
    stations_header_lines: int = 2

    # Archive file naming conventions
    data_file_prefix: str = r"(stundenwerte_FF_+)"
    product_file_pattern: str = r"(produkt+)"
    hourly_time_format: str = "%Y%m%d%H"

    # Most recent year with data across the directory; derived from stations when unset
    last_measured_year: Optional[int] = None

    # Database
    database_url: str = "sqlite:///data/wind_statistics.db"

    # Timeout in seconds for every outbound request
    request_timeout: float = 10.0

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
