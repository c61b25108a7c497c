import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from features.wind.models.wind_types import ErrorResponse, WindRequest, WindStatisticResponse
from features.wind.services.wind_statistics_service import WindStatisticsService
from features.common.exceptions.wind_exceptions import (
    CityNotFoundError,
    NoStatisticsInPeriodError
)

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Wind"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid query parameters"},
        404: {"model": ErrorResponse, "description": "City or statistics not found"},
        500: {"model": ErrorResponse, "description": "Internal error"}
    }
)

# Largest years value the store can take as a row limit
MAX_YEARS = 2**31 - 1

class InvalidQueryError(ValueError):
    pass

def get_wind_statistics_service(request: Request) -> WindStatisticsService:
    """Get WindStatisticsService instance from app state."""
    return request.app.state.wind_statistics_service

def error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content=ErrorResponse(Code=code, Message=message).model_dump()
    )

def validate_query_params(city: Optional[str], years: Optional[str]) -> WindRequest:
    if not city or not city.strip():
        raise InvalidQueryError("city parameter not provided in query")

    if not years:
        raise InvalidQueryError("years parameter not provided in query")

    try:
        years_number = int(years)
    except ValueError:
        raise InvalidQueryError("invalid years parameter")

    if years_number > MAX_YEARS:
        raise InvalidQueryError("invalid years parameter")

    if years_number < 1:
        raise InvalidQueryError("years should be more than 0")

    return WindRequest(city=city, years=years_number)

@router.get(
    "/wind",
    response_model=List[WindStatisticResponse],
    summary="Get annual average wind speed near a city",
    description="Returns the average wind speed per year for the last given years, "
                "measured by the nearest weather station with data in that period"
)
@router.get("/windStats", include_in_schema=False, response_model=List[WindStatisticResponse])
async def get_wind_statistics(
    city: Optional[str] = None,
    years: Optional[str] = None,
    service: WindStatisticsService = Depends(get_wind_statistics_service)
):
    """Get annual wind statistics for a city."""
    try:
        wind_request = validate_query_params(city, years)
    except InvalidQueryError as e:
        logger.warning(f"Rejected wind request: {str(e)}")
        return error_response(400, str(e))

    try:
        statistics = await service.get_wind_statistics(wind_request)
    except (CityNotFoundError, NoStatisticsInPeriodError) as e:
        return error_response(404, str(e))
    except Exception as e:
        logger.error(f"❌ Failed to get wind statistics for {wind_request.city}: {str(e)}")
        return error_response(500, "internal server error")

    return [WindStatisticResponse(year=s.year, speed=s.speed) for s in statistics]
