"""
SQLAlchemy async database module.

Re-exports engine and model utilities for the FastAPI service.
"""

from services.weatherapi.db.engine import create_engine, init_schema
from services.weatherapi.db.models import Base, Weather

__all__ = [
    "create_engine",
    "init_schema",
    "Base",
    "Weather",
]
