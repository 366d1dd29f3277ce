"""
WeatherLookupService: cache-or-fetch and cache-only reads.

Flow for get_or_fetch:
  validate -> store lookup -> (hit: return) | (miss: fetch -> create -> return)

Both operations return a LookupOutcome rather than raising: either a record
tagged HIT/MISS, or the WeatherError that stopped the request. The HTTP layer
turns the tag / error kind into a status code.

The service holds no mutable state and takes no locks, so one instance is
shared by every concurrent request. The only race (two first requests for
the same city) is settled by the store's create(): the loser re-reads and
returns the winner's record as a hit.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from services.weatherapi.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    WeatherError,
)
from services.weatherapi.weather.records import WeatherReading, WeatherRecord
from services.weatherapi.weather.store import WeatherStore
from services.weatherapi.weather.validation import normalize_city

logger = logging.getLogger(__name__)


class CacheStatus(str, enum.Enum):
    HIT = "hit"
    MISS = "miss"


class WeatherFetcher(Protocol):
    async def fetch(self, city: str) -> WeatherReading:
        ...


@dataclass(frozen=True)
class LookupOutcome:
    """Either (record, status) or error; never both."""

    record: WeatherRecord | None = None
    status: CacheStatus | None = None
    error: WeatherError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def hit(cls, record: WeatherRecord) -> LookupOutcome:
        return cls(record=record, status=CacheStatus.HIT)

    @classmethod
    def miss(cls, record: WeatherRecord) -> LookupOutcome:
        return cls(record=record, status=CacheStatus.MISS)

    @classmethod
    def failure(cls, error: WeatherError) -> LookupOutcome:
        return cls(error=error)


class WeatherLookupService:
    """
    Usage:
        service = WeatherLookupService(store=SqlWeatherStore(factory), fetcher=OpenWeatherFetcher(...))
        outcome = await service.get_or_fetch(" London ")
        if outcome.ok:
            outcome.record, outcome.status
    """

    def __init__(self, store: WeatherStore, fetcher: WeatherFetcher) -> None:
        self._store = store
        self._fetcher = fetcher

    async def get_or_fetch(self, raw_city: object) -> LookupOutcome:
        try:
            city = normalize_city(raw_city)
        except ValidationError as exc:
            return LookupOutcome.failure(exc)

        stage = "store-lookup"
        try:
            existing = await self._store.find_by_city(city)
            if existing is not None:
                logger.info("Returning cached weather for %s", city)
                return LookupOutcome.hit(existing)

            # Keyed by the normalised query; an alias of the provider name (nyc -> new york)
            # never hits here, so each repeat costs a provider call before the conflict re-read.
            stage = "external-fetch"
            logger.info("Fetching new weather data for %s from OpenWeatherMap", city)
            reading = await self._fetcher.fetch(city)

            stage = "store-write"
            result = await self._store.create(reading)
            if result.created:
                logger.info("Cached new weather data for %s", reading.city)
                return LookupOutcome.miss(result.record)

            # Lost the insert race: a concurrent request stored this city first.
            # Keyed by reading.city, the key the insert conflicted on.
            stage = "conflict-reread"
            logger.info("Weather for %s was stored concurrently, re-reading", reading.city)
            winner = await self._store.find_by_city(reading.city)
            if winner is None:
                raise ConflictError(
                    f"Weather for '{reading.city}' conflicted on insert but could not be re-read."
                )
            return LookupOutcome.hit(winner)
        except WeatherError as exc:
            return self._failed(exc, city, stage)

    async def get_cached_only(self, raw_city: object) -> LookupOutcome:
        try:
            city = normalize_city(raw_city)
        except ValidationError as exc:
            return LookupOutcome.failure(exc)

        try:
            existing = await self._store.find_by_city(city)
        except WeatherError as exc:
            return self._failed(exc, city, "store-lookup")

        if existing is None:
            return LookupOutcome.failure(
                NotFoundError(f"Weather data for city '{raw_city}' not found in cache.")
            )
        return LookupOutcome.hit(existing)

    def _failed(self, exc: WeatherError, city: str, stage: str) -> LookupOutcome:
        if isinstance(exc, NotFoundError):
            logger.info("Weather not found for city=%r at stage=%s: %s", city, stage, exc)
        else:
            logger.error(
                "Weather lookup failed for city=%r at stage=%s: %s: %s",
                city,
                stage,
                type(exc).__name__,
                exc,
                exc_info=exc,
            )
        return LookupOutcome.failure(exc)


__all__ = ["CacheStatus", "LookupOutcome", "WeatherFetcher", "WeatherLookupService"]
