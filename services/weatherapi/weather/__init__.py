"""
Weather lookup package.

Validates city names, fetches current conditions from OpenWeatherMap and
persists one record per city in the weather store.
"""

from services.weatherapi.weather.fetcher import OpenWeatherFetcher
from services.weatherapi.weather.service import CacheStatus, LookupOutcome, WeatherLookupService
from services.weatherapi.weather.store import CreateResult, SqlWeatherStore, WeatherStore

__all__ = [
    "OpenWeatherFetcher",
    "CacheStatus",
    "LookupOutcome",
    "WeatherLookupService",
    "CreateResult",
    "SqlWeatherStore",
    "WeatherStore",
]
