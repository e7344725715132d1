# ABOUTME: ASGI web entry point exposing GET /v1/weather/{city}.
# ABOUTME: Builds a Starlette app around WeatherEndpoint; run with `uvicorn weather_api.web:create_app --factory`.

import contextlib
import logging

import httpx
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weather_api.config import Settings, configure_logging
from weather_api.endpoint import WeatherEndpoint
from weather_api.weather_client import WeatherClient

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, http_client: httpx.AsyncClient | None = None) -> Starlette:
    """Build the ASGI app.

    The WeatherClient is constructed here rather than on first request, so a
    missing API key raises ConfigurationError before the server accepts traffic.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    client = WeatherClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout_ms=settings.timeout_ms,
        http_client=http_client,
    )
    endpoint = WeatherEndpoint(client)

    async def get_weather(request: Request) -> JSONResponse:
        # The path convertor keeps commas and slashes, e.g. "London,uk".
        status, body = await endpoint.handle(request.path_params["city"])
        return JSONResponse(body, status_code=status)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info("Weather API ready, provider base URL %s", client.base_url)
        yield
        await client.aclose()

    return Starlette(
        routes=[Route("/v1/weather/{city:path}", get_weather, methods=["GET"])],
        lifespan=lifespan,
    )
