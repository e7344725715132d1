# ABOUTME: Pydantic BaseModels for the OpenWeather current-weather response and the normalized snapshot.
# ABOUTME: Validation here is what separates a usable provider body from a malformed one.

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]


class UpstreamMain(BaseModel):
    """The `main` block of an OpenWeather current-weather body."""

    temp: float = Field(strict=True, allow_inf_nan=False)
    humidity: Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)] | None = None


class UpstreamCondition(BaseModel):
    """One entry of the OpenWeather `weather` list."""

    main: str | None = None


class UpstreamWeather(BaseModel):
    """Success body from OpenWeather `GET /weather`. Unknown fields are ignored."""

    name: NonEmptyStr
    main: UpstreamMain
    weather: list[UpstreamCondition] = Field(min_length=1)

    @field_validator("weather")
    @classmethod
    def primary_condition_present(cls, value: list[UpstreamCondition]) -> list[UpstreamCondition]:
        primary = value[0].main
        if primary is None or not primary.strip():
            raise ValueError("first weather entry has no 'main' condition")
        return value

    @property
    def condition(self) -> str:
        return self.weather[0].main.strip()


class WeatherSnapshot(BaseModel):
    """Normalized current weather for one city, built once per successful lookup."""

    model_config = ConfigDict(frozen=True)

    city: NonEmptyStr
    temperature_celsius: float = Field(allow_inf_nan=False)
    condition: NonEmptyStr
    humidity_percent: int | None = Field(default=None, ge=0)

    @field_validator("temperature_celsius")
    @classmethod
    def round_temperature(cls, value: float) -> float:
        # Half away from zero on the decimal text, so 15.25 -> 15.3 and -2.25 -> -2.3.
        return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    @classmethod
    def from_upstream(cls, upstream: UpstreamWeather) -> "WeatherSnapshot":
        humidity = upstream.main.humidity
        return cls(
            city=upstream.name,
            temperature_celsius=upstream.main.temp,
            condition=upstream.condition,
            humidity_percent=int(humidity) if humidity is not None else None,
        )

    def to_payload(self) -> dict:
        """Caller-facing JSON body. `humidity` stays in the body as null when unknown."""
        return {
            "city": self.city,
            "temperature": self.temperature_celsius,
            "condition": self.condition,
            "humidity": self.humidity_percent,
        }
