"""
Error kinds reported along the weather lookup path.

Every kind subclasses WeatherError so the lookup service can hand any of them
back inside a LookupOutcome, and the HTTP layer can map them to status codes
with a single table (see routers/weather.py).

  ValidationError           bad city input                       -> 400
  NotFoundError             provider 404, or city not cached     -> 404
  ConflictError             lost insert race and no winner found -> 500
  ConfigurationError        missing env config                   -> 500 / fatal at startup
  UpstreamError             provider non-2xx (not 404)           -> 500
  UpstreamUnavailableError  request sent, no response            -> 500
  RequestSetupError         request could not be built/sent      -> 500
  MalformedResponseError    provider 2xx with unusable payload   -> 500
  PersistenceError          database failure                     -> 500
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base class for every expected failure in the weather lookup path."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WeatherError):
    pass


class NotFoundError(WeatherError):
    pass


class ConflictError(WeatherError):
    pass


class ConfigurationError(WeatherError):
    pass


class UpstreamError(WeatherError):
    """Provider answered with a non-2xx status other than 404."""

    def __init__(self, status_code: int, status_text: str) -> None:
        super().__init__(f"External API error: {status_code} - {status_text}")
        self.status_code = status_code
        self.status_text = status_text


class UpstreamUnavailableError(WeatherError):
    pass


class RequestSetupError(WeatherError):
    pass


class MalformedResponseError(WeatherError):
    pass


class PersistenceError(WeatherError):
    pass


__all__ = [
    "WeatherError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ConfigurationError",
    "UpstreamError",
    "UpstreamUnavailableError",
    "RequestSetupError",
    "MalformedResponseError",
    "PersistenceError",
]
