# ABOUTME: Runtime settings for the weather API, read from the environment and an optional .env file.
# ABOUTME: Also owns the one-time logging setup used by the ASGI app.

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from weather_api.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT_MS = 10_000

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    """OpenWeather connection settings plus the log level."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from OPENWEATHER_* and LOG_LEVEL environment variables.

        The API key is not checked here; WeatherClient refuses a blank key when it is built.
        """
        load_dotenv()

        raw_timeout = os.environ.get("OPENWEATHER_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
        try:
            timeout_ms = int(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(f"OPENWEATHER_TIMEOUT_MS must be an integer, got {raw_timeout!r}") from e
        if timeout_ms <= 0:
            raise ConfigurationError(f"OPENWEATHER_TIMEOUT_MS must be positive, got {timeout_ms}")

        return cls(
            api_key=os.environ.get("OPENWEATHER_API_KEY", "").strip(),
            base_url=os.environ.get("OPENWEATHER_BASE_URL") or DEFAULT_BASE_URL,
            timeout_ms=timeout_ms,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str) -> None:
    """Install a root handler unless the host process already configured one."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
