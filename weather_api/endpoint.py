# ABOUTME: Caller-facing handler for GET /v1/weather/{city}.
# ABOUTME: Validates the city parameter and maps snapshots and tagged failures to HTTP status and JSON body.

import logging

from weather_api.errors import (
    MalformedUpstreamResponse,
    UpstreamClientError,
    UpstreamServerError,
    UpstreamUnreachable,
    ValidationFailure,
    WeatherError,
)
from weather_api.models import WeatherSnapshot
from weather_api.weather_client import WeatherClient

logger = logging.getLogger(__name__)

CITY_REQUIRED_MESSAGE = "The city parameter is required."
INVALID_DATA_MESSAGE = "Received invalid data from the weather service."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."

# Upstream statuses that read as "the provider is down" rather than a generic server fault.
_UNAVAILABLE_STATUSES = {502, 503, 504}


class WeatherEndpoint:
    """Turns a raw city path parameter into an (HTTP status, JSON body) pair."""

    def __init__(self, client: WeatherClient):
        self.client = client

    async def handle(self, city_param: str) -> tuple[int, dict]:
        city = city_param.strip()
        if not city:
            return 400, {
                "error": "Invalid input",
                "message": CITY_REQUIRED_MESSAGE,
                "errors": {"city": [CITY_REQUIRED_MESSAGE]},
            }

        try:
            result = await self.client.fetch(city)
            if isinstance(result, WeatherSnapshot):
                return 200, result.to_payload()
            return error_response(result)
        except Exception:
            logger.exception(
                "Unexpected error while handling weather request",
                extra={"event": "unexpected_error", "status": 500, "city": city},
            )
            return 500, {"error": "Internal Server Error", "message": UNEXPECTED_MESSAGE}


def error_response(error: WeatherError) -> tuple[int, dict]:
    """Map a tagged client failure to its HTTP status and JSON body."""
    match error:
        case ValidationFailure(message=message):
            return 400, {"error": "Bad Request", "message": message}
        case UpstreamClientError(status=status, message=message):
            return _http_status(status), {"error": "Client Error", "message": message}
        case UpstreamServerError(status=status, message=message):
            status = _http_status(status)
            label = "Service Unavailable" if status in _UNAVAILABLE_STATUSES else "Server Error"
            return status, {"error": label, "message": message}
        case UpstreamUnreachable(message=message):
            return 503, {"error": "Service Unavailable", "message": message}
        case MalformedUpstreamResponse():
            return 502, {"error": "Invalid Response", "message": INVALID_DATA_MESSAGE}
    raise TypeError(f"unhandled weather error: {error!r}")


def _http_status(status: int) -> int:
    """Pass through error statuses in [400, 600); anything else becomes 503."""
    return status if 400 <= status < 600 else 503
