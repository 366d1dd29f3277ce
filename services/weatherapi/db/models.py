"""
SQLAlchemy DeclarativeBase models.

Column names use camelCase to match the JSON field names of the API.
Unlike a read-only mirror, these models own the DDL: init_schema() in
db/engine.py runs Base.metadata.create_all at startup.
"""

import uuid as _uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Weather(Base):
    """One cached weather record per normalised city. Rows are never updated."""

    __tablename__ = "weathers"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(_uuid.uuid4()))
    # unique=True is the race arbiter for concurrent first fetches of a city
    city: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    feelsLike: Mapped[float] = mapped_column(Float, nullable=False)
    humidity: Mapped[float] = mapped_column(Float, nullable=False)
    pressure: Mapped[float] = mapped_column(Float, nullable=False)
    windSpeed: Mapped[float] = mapped_column(Float, nullable=False)
    createdAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updatedAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
