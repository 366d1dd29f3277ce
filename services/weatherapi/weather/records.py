"""
Weather value types.

WeatherReading is what the fetcher produces from a provider payload.
WeatherRecord is a reading the store has persisted: it adds the id and the
create/update timestamps. Records are never mutated after creation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def _iso_utc(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions for one city, metric units."""

    city: str
    temperature: float
    description: str
    feels_like: float
    humidity: float
    pressure: float
    wind_speed: float


@dataclass(frozen=True)
class WeatherRecord:
    id: str
    city: str
    temperature: float
    description: str
    feels_like: float
    humidity: float
    pressure: float
    wind_speed: float
    created_at: datetime
    updated_at: datetime

    def to_json(self) -> dict[str, Any]:
        """Serialise with the camelCase field names used on the wire."""
        return {
            "id": self.id,
            "city": self.city,
            "temperature": self.temperature,
            "description": self.description,
            "feelsLike": self.feels_like,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "windSpeed": self.wind_speed,
            "createdAt": _iso_utc(self.created_at),
            "updatedAt": _iso_utc(self.updated_at),
        }


__all__ = ["WeatherReading", "WeatherRecord"]
