import io
import zipfile
from unittest.mock import AsyncMock, MagicMock

from features.common.models.station_types import Coordinate, Station

def make_station(station_id: str, name: str, latitude: float, longitude: float, last_measured_year: int = 2021) -> Station:
    return Station(
        station_id=station_id,
        name=name,
        coordinate=Coordinate(latitude=latitude, longitude=longitude),
        last_measured_year=last_measured_year
    )

def mock_response(json_data=None, body: bytes = b"", error: Exception = None) -> MagicMock:
    """Build an async context manager like the one aiohttp's session.get returns."""
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.json = AsyncMock(return_value=json_data)
    response.read = AsyncMock(return_value=body)

    context = MagicMock()
    if error is not None:
        context.__aenter__ = AsyncMock(side_effect=error)
    else:
        context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context

def mock_session(*responses: MagicMock) -> MagicMock:
    session = MagicMock()
    session.get = MagicMock(side_effect=list(responses))
    return session

def make_zip(files: dict) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()
