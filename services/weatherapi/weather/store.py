"""
Weather store: persistent records keyed by normalised city name.

The store is the single source of truth; nothing above it keeps copies.

create() is a compare-and-swap style insert. It never raises on a duplicate
city. Instead it reports whether this call performed the insert:

    CreateResult(record=<new record>, created=True)   inserted
    CreateResult(record=None,         created=False)  another writer got there first

The SQL implementation relies on the unique constraint on weathers.city:

    INSERT ... ON CONFLICT (city) DO NOTHING RETURNING *

so exactly one of N concurrent inserts for a city returns a row.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from services.weatherapi.db.models import Weather
from services.weatherapi.errors import PersistenceError
from services.weatherapi.weather.records import WeatherReading, WeatherRecord

logger = logging.getLogger(__name__)

# asyncpg lets connect-time failures (refused, reset, timed out) through unwrapped
_DB_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


@dataclass(frozen=True)
class CreateResult:
    record: WeatherRecord | None
    created: bool


class WeatherStore(Protocol):
    """Persistence contract used by WeatherLookupService."""

    async def find_by_city(self, city: str) -> WeatherRecord | None:
        """Return the record for a normalised city, or None. A miss is not an error."""
        ...

    async def create(self, reading: WeatherReading) -> CreateResult:
        """Insert unless a record for reading.city exists; report which happened."""
        ...


def _record_from_row(row: Weather) -> WeatherRecord:
    return WeatherRecord(
        id=row.id,
        city=row.city,
        temperature=row.temperature,
        description=row.description,
        feels_like=row.feelsLike,
        humidity=row.humidity,
        pressure=row.pressure,
        wind_speed=row.windSpeed,
        created_at=row.createdAt,
        updated_at=row.updatedAt,
    )


class SqlWeatherStore:
    """
    WeatherStore backed by PostgreSQL through SQLAlchemy async sessions.

    Usage:
        store = SqlWeatherStore(async_sessionmaker(engine, expire_on_commit=False))
        record = await store.find_by_city("london")
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def find_by_city(self, city: str) -> WeatherRecord | None:
        stmt = select(Weather).where(Weather.city == city)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                row = result.scalars().first()
                return _record_from_row(row) if row is not None else None
        except _DB_ERRORS as exc:
            logger.debug("Weather store lookup failed for city=%r", city, exc_info=True)
            raise PersistenceError(f"Database error while reading weather: {exc}") from exc

    async def create(self, reading: WeatherReading) -> CreateResult:
        now = datetime.now(timezone.utc)
        stmt = (
            pg_insert(Weather)
            .values(
                id=str(uuid.uuid4()),
                city=reading.city,
                temperature=reading.temperature,
                description=reading.description,
                feelsLike=reading.feels_like,
                humidity=reading.humidity,
                pressure=reading.pressure,
                windSpeed=reading.wind_speed,
                createdAt=now,
                updatedAt=now,
            )
            .on_conflict_do_nothing(index_elements=[Weather.city])
            .returning(Weather)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                row = result.scalars().first()
                record = _record_from_row(row) if row is not None else None
                await session.commit()
        except _DB_ERRORS as exc:
            logger.debug("Weather store insert failed for city=%r", reading.city, exc_info=True)
            raise PersistenceError(f"Database error while saving weather: {exc}") from exc

        if record is None:
            logger.debug("Weather insert skipped, city=%r already stored", reading.city)
            return CreateResult(record=None, created=False)
        return CreateResult(record=record, created=True)


__all__ = ["CreateResult", "WeatherStore", "SqlWeatherStore"]
