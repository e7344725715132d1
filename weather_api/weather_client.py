# ABOUTME: Client for the OpenWeather current-weather endpoint.
# ABOUTME: Maps every provider outcome to a WeatherSnapshot or a tagged WeatherError, never raising per call.

import asyncio
import logging

import httpx
from pydantic import ValidationError

from weather_api.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS
from weather_api.errors import (
    ConfigurationError,
    MalformedUpstreamResponse,
    UpstreamClientError,
    UpstreamServerError,
    UpstreamUnreachable,
    ValidationFailure,
    WeatherError,
)
from weather_api.models import UpstreamWeather, WeatherSnapshot

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Weather service is currently unavailable. Please try again later."

STATUS_MESSAGES = {
    401: "Invalid API key. Please check your OpenWeather configuration.",
    404: "City not found. Please check the city name and try again.",
    429: "API rate limit exceeded. Please try again later.",
    500: UNAVAILABLE_MESSAGE,
    502: UNAVAILABLE_MESSAGE,
    503: UNAVAILABLE_MESSAGE,
    504: UNAVAILABLE_MESSAGE,
}

FALLBACK_MESSAGE = "Failed to fetch weather data. Please try again."
UNREACHABLE_MESSAGE = "Unable to connect to the weather service. Please try again later."
MALFORMED_MESSAGE = "Received invalid weather data from the API"

# Status reported for provider codes that are not valid HTTP statuses at all.
OUT_OF_RANGE_STATUS = 503


class WeatherClient:
    """Fetches current weather for a city from OpenWeather.

    Holds only read-only configuration and an httpx.AsyncClient, so one instance
    can serve concurrent requests.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "OpenWeather API key is not configured. Please set OPENWEATHER_API_KEY in your .env file."
            )
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"OpenWeather base URL is invalid: {base_url!r}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"OpenWeather base URL must be an absolute http(s) URL, got {base_url!r}")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout_ms / 1000)

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def fetch(self, city: str) -> WeatherSnapshot | WeatherError:
        """Look up current weather for `city` ("London" or "London,uk") with one GET."""
        city = city.strip()
        if not city:
            return ValidationFailure(field="city", message="City name cannot be empty")

        try:
            resp = await asyncio.wait_for(
                self.http_client.get(
                    f"{self.base_url}/weather",
                    params={"q": city, "appid": self.api_key, "units": "metric"},
                ),
                timeout=self.timeout_ms / 1000,
            )
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as e:
            logger.error(
                "Network error while fetching weather data: %s",
                type(e).__name__,
                extra={"event": "upstream_unreachable", "status": None, "city": city},
            )
            return UpstreamUnreachable(message=UNREACHABLE_MESSAGE)

        if not resp.is_success:
            return self._status_error(resp, city)

        try:
            upstream = UpstreamWeather.model_validate_json(resp.content)
        except ValidationError as e:
            logger.error(
                "Invalid API response structure: %s",
                resp.text,
                extra={
                    "event": "malformed_upstream_response",
                    "status": resp.status_code,
                    "city": city,
                    "errors": e.errors(include_url=False),
                },
            )
            return MalformedUpstreamResponse(message=MALFORMED_MESSAGE)

        return WeatherSnapshot.from_upstream(upstream)

    def _status_error(self, resp: httpx.Response, city: str) -> UpstreamClientError | UpstreamServerError:
        """Classify a non-2xx provider response and pick the caller-facing message."""
        status = resp.status_code
        message = STATUS_MESSAGES.get(status) or _provider_message(resp) or FALLBACK_MESSAGE

        logger.error(
            "Weather API error: %s",
            message,
            extra={"event": "upstream_status_error", "status": status, "city": city},
        )

        if 400 <= status < 500:
            return UpstreamClientError(status=status, message=message)
        if not 100 <= status <= 599:
            status = OUT_OF_RANGE_STATUS
        return UpstreamServerError(status=status, message=message)


def _provider_message(resp: httpx.Response) -> str | None:
    """Pull the `message` field out of an error body, if the body is a JSON object carrying one."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None
