# ABOUTME: Shared test fixtures for the weather API test suite.
# ABOUTME: Provides canned OpenWeather bodies and mock httpx clients so no test touches the network.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_api.weather_client import WeatherClient

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://owm.test/data/2.5"


def owm_body(**overrides) -> dict:
    """A valid OpenWeather current-weather body, with top-level keys optionally replaced."""
    body = {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "main": {"temp": 18.46, "feels_like": 17.9, "pressure": 1017, "humidity": 62.8},
        "name": "London",
        "cod": 200,
    }
    body.update(overrides)
    return body


def mock_http_client(json_data=None, status_code: int = 200, content: bytes | None = None) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() returns the given response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    request = httpx.Request("GET", f"{TEST_BASE_URL}/weather")
    if content is not None:
        response = httpx.Response(status_code=status_code, content=content, request=request)
    else:
        response = httpx.Response(status_code=status_code, json=json_data, request=request)
    mock.get.return_value = response
    return mock


def failing_http_client(exc: Exception) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() raises `exc`."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.side_effect = exc
    return mock


def make_client(http_client: httpx.AsyncClient, timeout_ms: int = 10_000) -> WeatherClient:
    return WeatherClient(api_key=TEST_API_KEY, base_url=TEST_BASE_URL, timeout_ms=timeout_ms, http_client=http_client)


@pytest.fixture
def clean_env(monkeypatch):
    """Strip weather settings from the environment and keep .env files out of the way."""
    for name in ("OPENWEATHER_API_KEY", "OPENWEATHER_BASE_URL", "OPENWEATHER_TIMEOUT_MS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("weather_api.config.load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch
