"""
OpenWeatherFetcher: OpenWeatherMap current-weather client.

One GET per call, no retries. Every failure surfaces as its own error kind so
the lookup service can pass it through unchanged:

  404 from provider          -> NotFoundError
  other non-2xx              -> UpstreamError(status_code, status_text)
  timeout / connection drop  -> UpstreamUnavailableError
  request never sent         -> RequestSetupError
  2xx with unusable body     -> MalformedResponseError

OpenWeatherMap /weather (units=metric) returns:
  {
    "name":    "London",
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky"}],
    "main":    {"temp": 15.0, "feels_like": 14.0, "humidity": 60, "pressure": 1012},
    "wind":    {"speed": 3.5},
    ...
  }
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from services.weatherapi.config import Settings
from services.weatherapi.errors import (
    ConfigurationError,
    MalformedResponseError,
    NotFoundError,
    RequestSetupError,
    UpstreamError,
    UpstreamUnavailableError,
)
from services.weatherapi.weather.records import WeatherReading

logger = logging.getLogger(__name__)

# HTTP timeout for OpenWeatherMap calls
_API_TIMEOUT_S = 8.0

# httpx errors raised before anything reached the provider
_SETUP_ERRORS = (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError)


def _number(section: dict[str, Any], key: str) -> float:
    value = section[key]
    # bool is an int subclass; a boolean temperature is still a broken payload
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} is not a number: {value!r}")
    return value


def _parse_reading(owm_payload: Any) -> WeatherReading:
    """
    Map an OpenWeatherMap /weather response onto a WeatherReading.

    Raises MalformedResponseError if any expected field is missing or has the
    wrong type.
    """
    try:
        name = owm_payload["name"]
        if not isinstance(name, str) or not name.strip():
            raise TypeError(f"name is not a non-empty string: {name!r}")

        main = owm_payload["main"]
        description = owm_payload["weather"][0]["description"]
        if not isinstance(description, str):
            raise TypeError(f"description is not a string: {description!r}")

        return WeatherReading(
            city=name.strip().lower(),
            temperature=_number(main, "temp"),
            description=description,
            feels_like=_number(main, "feels_like"),
            humidity=_number(main, "humidity"),
            pressure=_number(main, "pressure"),
            wind_speed=_number(owm_payload["wind"], "speed"),
        )
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError(
            f"External weather API returned an unexpected payload: {exc}"
        ) from exc


class OpenWeatherFetcher:
    """
    Fetch current weather for a normalised city name.

    Usage:
        fetcher = OpenWeatherFetcher(api_key="...", base_url="https://api.openweathermap.org/data/2.5/weather")
        reading = await fetcher.fetch("london")
    """

    def __init__(self, api_key: str, base_url: str, timeout_s: float = _API_TIMEOUT_S) -> None:
        """
        Args:
            api_key:   OpenWeatherMap API key (OPENWEATHER_API_KEY env var).
            base_url:  Full /weather endpoint URL (OPENWEATHER_BASE_URL env var).
            timeout_s: Transport timeout for the single GET.
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_s = timeout_s

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenWeatherFetcher:
        return cls(
            api_key=settings.openweather_api_key,
            base_url=settings.openweather_base_url,
            timeout_s=settings.weather_api_timeout_s,
        )

    async def fetch(self, city: str) -> WeatherReading:
        if not self._api_key:
            raise ConfigurationError("OpenWeatherMap API key is not configured.")
        if not self._base_url:
            raise ConfigurationError("OpenWeatherMap base URL is not configured.")

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                resp = await client.get(
                    self._base_url,
                    params={
                        "q": city,
                        "appid": self._api_key,
                        "units": "metric",
                    },
                )
        except _SETUP_ERRORS as exc:
            logger.warning("OpenWeatherMap request setup failed for city=%r: %s", city, exc)
            raise RequestSetupError(f"Error setting up external API request: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("OpenWeatherMap sent no response for city=%r: %r", city, exc)
            raise UpstreamUnavailableError("No response from external weather API.") from exc

        if resp.status_code == 404:
            raise NotFoundError("City not found by external source.")
        if not 200 <= resp.status_code < 300:
            logger.warning(
                "OpenWeatherMap returned %d for city=%r: %s",
                resp.status_code,
                city,
                resp.text[:200],
            )
            raise UpstreamError(resp.status_code, resp.reason_phrase)

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning("OpenWeatherMap returned non-JSON body for city=%r", city)
            raise MalformedResponseError("External weather API returned a non-JSON body.") from exc

        try:
            return _parse_reading(payload)
        except MalformedResponseError:
            logger.warning("OpenWeatherMap payload for city=%r is missing fields", city)
            raise
