from datetime import datetime
from pydantic import BaseModel, Field

class WindRequest(BaseModel):
    """Wind statistics request parameters."""
    city: str = Field(..., min_length=1)
    years: int = Field(..., ge=1, le=2**31 - 1)

class HourlySample(BaseModel):
    """Single hourly measurement from a station product file."""
    end_date: datetime  # end of the measured hour
    speed: float  # m/s, -999 when unknown

class AnnualStatistic(BaseModel):
    """Average wind speed of a station for one calendar year."""
    station_name: str
    year: int
    speed: float  # m/s

    class Config:
        from_attributes = True

class WindStatisticResponse(BaseModel):
    """Public representation of an annual statistic."""
    year: int = Field(alias="Year")
    speed: float = Field(alias="Speed", description="Average wind speed in m/s")

    class Config:
        populate_by_name = True

class ErrorResponse(BaseModel):
    Code: int
    Message: str
