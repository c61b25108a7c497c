from pydantic import BaseModel, Field

class Coordinate(BaseModel):
    """Geographic point in degrees."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

class Station(BaseModel):
    """Weather station from the station directory."""
    station_id: str = Field(alias="id")  # Allow "id" to map to station_id
    name: str
    coordinate: Coordinate
    last_measured_year: int

    class Config:
        populate_by_name = True
        from_attributes = True
        frozen = True
