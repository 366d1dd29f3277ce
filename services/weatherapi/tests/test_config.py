"""
Settings tests: defaults, environment overrides, validation bounds.

Each Settings() is built with _env_file=None so a developer's local .env
does not leak into the assertions.
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from services.weatherapi.config import Settings

_ENV_VARS = (
    "DATABASE_URL",
    "OPENWEATHER_API_KEY",
    "OPENWEATHER_BASE_URL",
    "PORT",
    "WEATHER_API_TIMEOUT_S",
    "ENVIRONMENT",
    "LOG_LEVEL",
    "SENTRY_DSN",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    def test_server_defaults(self, clean_env):
        s = Settings(_env_file=None)
        assert s.port == 3000
        assert s.host == "0.0.0.0"
        assert s.weather_api_timeout_s == 8.0
        assert s.environment == "development"

    def test_required_values_default_empty(self, clean_env):
        s = Settings(_env_file=None)
        assert s.database_url == ""
        assert s.openweather_api_key == ""
        assert s.openweather_base_url == ""
        assert s.sentry_dsn == ""


class TestEnvironment:
    def test_reads_env(self, clean_env):
        clean_env.setenv("DATABASE_URL", "postgresql://u:p@db:5432/weather")
        clean_env.setenv("OPENWEATHER_API_KEY", "abc")
        clean_env.setenv("OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5/weather")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("WEATHER_API_TIMEOUT_S", "2.5")

        s = Settings(_env_file=None)

        assert s.database_url == "postgresql://u:p@db:5432/weather"
        assert s.openweather_api_key == "abc"
        assert s.openweather_base_url.endswith("/weather")
        assert s.port == 8080
        assert s.weather_api_timeout_s == 2.5

    @pytest.mark.parametrize("name,value", [
        ("PORT", "0"),
        ("PORT", "70000"),
        ("WEATHER_API_TIMEOUT_S", "0"),
        ("ENVIRONMENT", "qa"),
        ("LOG_LEVEL", "chatty"),
    ])
    def test_rejects_out_of_range(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(SettingsValidationError):
            Settings(_env_file=None)
