"""
Application configuration via pydantic-settings.
All config read from environment variables with sensible defaults for local dev.

OPENWEATHER_API_KEY / OPENWEATHER_BASE_URL are only checked when a fetch is
attempted; DATABASE_URL is checked at startup (see db/engine.py).
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "weather-cache-api"
    app_version: str = "0.1.0"
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    debug: bool = False
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    # Database (PostgreSQL, asyncpg driver)
    database_url: str = ""

    # CORS
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    # Sentry
    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)

    # Weather (OpenWeatherMap)
    openweather_api_key: str = ""
    openweather_base_url: str = ""
    weather_api_timeout_s: float = Field(default=8.0, gt=0.0)

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
