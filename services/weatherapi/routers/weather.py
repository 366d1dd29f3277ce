"""
Weather endpoints.

  GET /api/v1/weather?city={name}  -- cache-or-fetch: 200 on cache hit, 201 when newly fetched and stored
  GET /api/v1/weather/{name}       -- cache-only: 200, or 404 when the city is not stored

Records are returned as bare JSON objects (no envelope). Errors use
{"message": ..., "error"?: ...}; only 500s carry the underlying error text.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from services.weatherapi.errors import NotFoundError, ValidationError, WeatherError
from services.weatherapi.weather.service import CacheStatus, LookupOutcome, WeatherLookupService

router = APIRouter(prefix="/api/v1", tags=["weather"])

# Error kind -> HTTP status. Anything not listed (or not a subclass of a listed kind) is a 500.
ERROR_STATUS: dict[type[WeatherError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
}

CACHE_STATUS: dict[CacheStatus, int] = {
    CacheStatus.HIT: 200,
    CacheStatus.MISS: 201,
}


def status_for_error(error: WeatherError) -> int:
    for kind in type(error).__mro__:
        if kind in ERROR_STATUS:
            return ERROR_STATUS[kind]
    return 500


def get_lookup_service(request: Request) -> WeatherLookupService:
    """FastAPI dependency -- the service built in the lifespan."""
    return request.app.state.lookup_service


def _to_response(outcome: LookupOutcome, internal_message: str) -> JSONResponse:
    if outcome.ok:
        return JSONResponse(
            status_code=CACHE_STATUS[outcome.status],
            content=outcome.record.to_json(),
        )

    status_code = status_for_error(outcome.error)
    if status_code >= 500:
        content = {"message": internal_message, "error": outcome.error.message}
    else:
        content = {"message": outcome.error.message}
    return JSONResponse(status_code=status_code, content=content)


@router.get("/weather")
async def get_weather_by_city_query(
    city: str | None = Query(None, description="City name"),
    service: WeatherLookupService = Depends(get_lookup_service),
) -> JSONResponse:
    outcome = await service.get_or_fetch(city)
    return _to_response(outcome, "Internal server error while fetching weather.")


@router.get("/weather/{city}")
async def get_stored_weather_by_city(
    city: str,
    service: WeatherLookupService = Depends(get_lookup_service),
) -> JSONResponse:
    outcome = await service.get_cached_only(city)
    return _to_response(outcome, "Internal server error while retrieving cached weather.")
